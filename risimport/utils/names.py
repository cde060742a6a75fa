"""Person-name normalization for author and editor lists.

All functions are pure (no I/O) and suitable for unit testing.

Input is a BibTeX-style name list, names separated by the word "and":

    "John Smith and Doe, Jane and Jan van den Berg"

Output puts every name in "Last, First" order:

    "Smith, John and Doe, Jane and van den Berg, Jan"

Rules per name:
  - Already contains a comma: kept, with the spacing around the comma(s)
    normalized ("Smith ,J" → "Smith, J").
  - Wrapped in braces (corporate author, "{World Health Organization}"):
    kept verbatim.
  - Single token: kept verbatim.
  - Otherwise the last token is the last name; lower-case particles
    directly before it (van, von, de, ...) belong to the last name.
"""
from __future__ import annotations

import re

_AND_RE = re.compile(r"\s*(?<!\S)and(?!\S)\s*")
_WHITESPACE_RE = re.compile(r"\s+")

# Lower-case name particles that belong to the last name
_PARTICLES = frozenset({
    "da", "de", "del", "della", "den", "der", "di", "du", "la", "le",
    "van", "von",
})


def split_names(raw: str) -> list[str]:
    """Split a name list on "and", dropping blank entries."""
    if not raw:
        return []
    names = (_WHITESPACE_RE.sub(" ", n).strip() for n in _AND_RE.split(raw.strip()))
    return [n for n in names if n]


def last_name_first(name: str) -> str:
    if name.startswith("{") and name.endswith("}"):
        return name

    if "," in name:
        parts = [p.strip() for p in name.split(",")]
        return ", ".join(p for p in parts if p)

    tokens = name.split(" ")
    if len(tokens) == 1:
        return name

    # Walk back from the last token, absorbing particles into the last name
    split_at = len(tokens) - 1
    while split_at > 1 and tokens[split_at - 1] in _PARTICLES:
        split_at -= 1

    last = " ".join(tokens[split_at:])
    first = " ".join(tokens[:split_at])
    return f"{last}, {first}"


def normalize_authors(raw: str) -> str:
    """
    Return the name list with every name in "Last, First" order.

    Idempotent: normalizing an already normalized list returns it unchanged.
    Returns "" for blank input.
    """
    return " and ".join(last_name_first(n) for n in split_names(raw))
