"""
RIS format importer.

Converts RIS text into a list of Record objects, one per entry, in file
order.  Pipeline per file:

  1. read lines and re-join them with "\\n"
  2. normalize Unicode dashes (en dash → "-", em dash / horizontal bar → "--")
  3. split_records()  — cut at every "ER  - " end-of-record line
  4. tokenize()       — per record, join continuation lines into TagValues
  5. RecordBuilder    — map tags to fields, pick the date, build the Record

RIS line layout (fixed width prefix):

  TY  - JOUR
  ^^         tag, 2 characters
    ^^^^     separator "  - "
        ^^^^ value, trimmed

A line that does not carry the separator at [2:6] continues the value of
the line before it.

Entry points:
  RisImporter      — importer with injectable collaborators (type, author
                     and month resolution).
  parse()          — text or lines → list[Record] with the default importer.
  parse_tolerant() — bytes → ParseResult; never raises.
"""
from __future__ import annotations

import logging
import re
from typing import Callable, Iterable, List, Optional, Union

from risimport.parsers.base import ParseResult, Record, StreamError, TagValue
from risimport.parsers.detector import is_recognized, read_text, split_lines
from risimport.parsers.ris_fields import TRIM_CHARS, RecordBuilder
from risimport.utils.entry_types import resolve_type as default_resolve_type
from risimport.utils.months import Month, resolve_month as default_resolve_month
from risimport.utils.names import normalize_authors as default_normalize_authors

logger = logging.getLogger(__name__)

Source = Union[str, Iterable[str]]

SEPARATOR = "  - "
# Shortest line that can carry a tag: 2-char tag + separator
MIN_TAG_LINE = 6

# End-of-record line; the line and its newline are discarded by the split
_ER_SPLIT_RE = re.compile(r"^ER  -[^\n]*\n?", re.MULTILINE)

_DASHES = str.maketrans({
    "\u2013": "-",   # en dash
    "\u2014": "--",  # em dash
    "\u2015": "--",  # horizontal bar
})

_BOM = "\ufeff"

# Unicode spaces that do not count as whitespace at a continuation seam
_NON_BREAKING = "\u00a0\u2007\u202f\x85"


def normalize_dashes(text: str) -> str:
    return text.translate(_DASHES)


def split_records(text: str) -> List[str]:
    """
    Split a whole RIS text into record bodies.

    Dashes are normalized on the whole text first.  Bodies that are empty or
    whitespace-only (blank input, text after the last end marker, two end
    markers in a row) are not records and are dropped.
    """
    bodies = []
    for body in _ER_SPLIT_RE.split(normalize_dashes(text)):
        if not body.strip():
            continue
        bodies.append(body[:-1] if body.endswith("\n") else body)
    return bodies


def tokenize(lines: Iterable[str]) -> List[TagValue]:
    """
    Turn the lines of one record into TagValues.

    A following line is appended to the current one while it does not start
    a new tag (shorter than MIN_TAG_LINE, or no separator at [2:6]).  One
    space is inserted between the two only when neither side already has
    whitespace at the seam.  Lines still shorter than MIN_TAG_LINE after
    joining are dropped.
    """
    lines = list(lines)
    tokens: List[TagValue] = []
    i = 0
    while i < len(lines):
        current = lines[i]
        while i + 1 < len(lines) and _is_continuation(lines[i + 1]):
            nxt = lines[i + 1]
            if current and nxt and not _is_space(current[-1]) and not _is_space(nxt[0]):
                current += " "
            current += nxt
            i += 1
        i += 1

        if len(current) < MIN_TAG_LINE:
            continue
        tokens.append(TagValue(current[:2], current[MIN_TAG_LINE:].strip(TRIM_CHARS)))
    return tokens


class RisImporter:
    """
    Importer for RIS tagged bibliographic files.

    The three collaborators default to the implementations in
    ``risimport.utils``; pass your own to plug in a different entry type
    registry, name formatter or month table.
    """

    NAME = "RIS"
    FILE_EXTENSIONS = (".ris",)
    DESCRIPTION = "Imports a Biblioscape Tag File."

    def __init__(
        self,
        resolve_type: Callable[[str], str] = default_resolve_type,
        normalize_authors: Callable[[str], str] = default_normalize_authors,
        resolve_month: Callable[[int], Optional[Month]] = default_resolve_month,
    ):
        self.resolve_type = resolve_type
        self.normalize_authors = normalize_authors
        self.resolve_month = resolve_month

    def is_recognized_format(self, source: Source) -> bool:
        """True if any line of ``source`` is a "TY  - " start-of-record line."""
        return is_recognized(source)

    def import_database(self, source: Source) -> List[Record]:
        """
        Parse every record in ``source``.

        Raises StreamError if reading from ``source`` fails.  Nothing else is
        raised: a record group without usable fields still yields a Record of
        type "other" with no fields.
        """
        text = "\n".join(_read_lines(source))
        records = [self.parse_record(body) for body in split_records(text)]
        logger.debug("Imported %d RIS record(s)", len(records))
        return records

    def parse_record(self, body: str) -> Record:
        """Build one Record from the text of a single record body."""
        builder = RecordBuilder()
        for tag, value in tokenize(body.split("\n")):
            builder.apply(tag, value)
        record = builder.build(self.resolve_type, self.normalize_authors, self.resolve_month)
        logger.debug(
            "RIS record type=%s with %d field(s)", record.type, len(record.fields)
        )
        return record


_default_importer = RisImporter()


def parse(source: Source) -> List[Record]:
    """Parse RIS text (or lines) with the default collaborators."""
    return _default_importer.import_database(source)


def parse_tolerant(file_bytes: bytes) -> ParseResult:
    """
    Decode and parse a RIS file.

    Never raises: bytes always decode (latin-1 fallback) and the importer
    does not fail on malformed records.  A file without any "TY  - " line
    still runs through the importer; its warnings say so.
    """
    text = read_text(file_bytes)
    warnings: list[str] = []
    if not is_recognized(text):
        warnings.append("No 'TY  - ' start-of-record line found.")

    records = _default_importer.import_database(text)
    logger.info("Parsed %d RIS record(s) from %d byte(s)", len(records), len(file_bytes))
    return ParseResult(
        records=records,
        format_detected="ris",
        total_attempted=len(records),
        warnings=warnings,
    )


# ── internal helpers ──────────────────────────────────────────────────────────

def _is_space(ch: str) -> bool:
    return ch.isspace() and ch not in _NON_BREAKING


def _is_continuation(line: str) -> bool:
    return len(line) < MIN_TAG_LINE or line[2:MIN_TAG_LINE] != SEPARATOR


def _read_lines(source: Source) -> List[str]:
    """
    Materialize ``source`` as a list of lines without line terminators.

    Lines end at "\\n", "\\r\\n" or "\\r", the way a line reader splits them.
    A BOM at the very start is dropped.
    """
    if isinstance(source, str):
        lines = split_lines(source)
    else:
        try:
            lines = split_lines("".join(_iter_chunks(source)))
        except (OSError, UnicodeDecodeError) as exc:
            raise StreamError(f"Cannot read RIS input: {exc}") from exc

    if lines and lines[0].startswith(_BOM):
        lines[0] = lines[0][1:]
    return lines


def _iter_chunks(source: Iterable[str]) -> Iterable[str]:
    # Bare iterables of lines may or may not keep their terminators
    for line in source:
        yield line if line.endswith(("\n", "\r")) else line + "\n"
