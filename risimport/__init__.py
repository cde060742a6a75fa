"""Import RIS tagged bibliographic files into structured records."""
from risimport.parsers import (
    ParseResult,
    Record,
    RisImporter,
    StreamError,
    TagValue,
    parse_file,
)
from risimport.parsers.ris import parse
from risimport.utils.months import Month

__version__ = "0.1.0"

__all__ = [
    "Month",
    "ParseResult",
    "Record",
    "RisImporter",
    "StreamError",
    "TagValue",
    "parse",
    "parse_file",
]
