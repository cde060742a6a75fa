from risimport.utils.entry_types import resolve_type
from risimport.utils.months import Month, resolve_month
from risimport.utils.names import normalize_authors

__all__ = ["Month", "normalize_authors", "resolve_month", "resolve_type"]
