"""Entry type resolution for imported records."""
from __future__ import annotations

DEFAULT_TYPE = "other"

KNOWN_TYPES = frozenset({
    "article",
    "book",
    "booklet",
    "conference",
    "inbook",
    "incollection",
    "inproceedings",
    "manual",
    "mastersthesis",
    "misc",
    "phdthesis",
    "proceedings",
    "techreport",
    "unpublished",
    "patent",
    DEFAULT_TYPE,
})


def resolve_type(label: str) -> str:
    """
    Map a type label to a known entry type.

    Lookup is case-insensitive; blank or unknown labels resolve to "other".
    """
    key = (label or "").strip().lower()
    return key if key in KNOWN_TYPES else DEFAULT_TYPE
