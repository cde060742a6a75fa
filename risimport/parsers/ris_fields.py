"""
RIS tag → record field mapping.

RecordBuilder is the per-record accumulator.  The importer feeds it every
TagValue of one record, in file order, through ``apply()`` and then calls
``build()`` once to get the finished Record.

Tag dispatch is a single ordered chain: the first matching branch wins, so
the order of the branches in ``apply()`` is part of the observable
behaviour.  Duplicated tags in the chain:

  JA, JF — JF is always taken by the JO/J1/JF branch.  JA reaches the
           second JA/JF branch only when a journal is already set, where it
           overwrites the journal (or the booktitle for inproceedings).
  N1     — taken by the comment branch; only RN reaches the note branch.
  DB     — taken by the "database" branch; a later "archive" mapping for DB
           can never be reached and is not implemented.

Date selection: Y1, PY, DA and Y2 are ranked in that order.  A date tag is
accepted only when its first four characters are a year and its rank beats
every date accepted so far, whatever the order the tags appear in.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional

from risimport.config import settings
from risimport.parsers.base import Record
from risimport.utils.months import Month

logger = logging.getLogger(__name__)

# Highest priority first
DATE_TAGS = ("Y1", "PY", "DA", "Y2")

# TY value → entry type label
RIS_TYPES = {
    "BOOK": "book",
    "JOUR": "article",
    "MGZN": "article",
    "THES": "phdthesis",
    "UNPB": "unpublished",
    "RPRT": "techreport",
    "CONF": "inproceedings",
    "CHAP": "incollection",
    "PAT": "patent",
}
OTHER_TYPE = "other"

# Tags handled after every other branch; plain overwrite of one field
_TRAILING_FIELDS = {
    "TA": "translator",
    "AV": "archive_location",
    "CN": "call-number",
    "VO": "call-number",
    "NV": "number-of-volumes",
    "OP": "original-title",
    "RI": "reviewed-title",
    "RP": "status",
    "SE": "section",
    "ID": "refid",
}

# Whitespace is ASCII only: no-break spaces stay inside titles
_WHITESPACE_RE = re.compile(r"\s+", re.ASCII)
_YEAR_RE = re.compile(r"[0-9]{4}")
_MONTH_RE = re.compile(r"[+-]?[0-9]+")

# Control characters and space, the set a value is trimmed of
TRIM_CHARS = "".join(chr(c) for c in range(0x21))
_DOI_PREFIX_RE = re.compile(r"doi:", re.IGNORECASE)


def date_priority(tag: str) -> int:
    """Rank of a date tag, 0 is best; non-date tags rank after all of them."""
    try:
        return DATE_TAGS.index(tag)
    except ValueError:
        return len(DATE_TAGS)


def is_year(text: str) -> bool:
    """Four ASCII digits naming a year of the common era (0000 is not one)."""
    return bool(_YEAR_RE.fullmatch(text)) and int(text) >= 1


@dataclass
class RecordBuilder:
    """Mutable accumulator for one record."""
    line_separator: str = field(default_factory=lambda: settings.line_separator)

    record_type: str = ""
    fields: Dict[str, str] = field(default_factory=dict)
    author: str = ""
    editor: str = ""
    comment: str = ""
    start_page: str = ""
    end_page: str = ""

    date_tag: str = ""
    date_value: str = ""
    date_rank: int = len(DATE_TAGS)

    def apply(self, tag: str, value: str) -> None:
        """Fold one tag/value pair into the record.  Unknown tags are ignored."""
        fields = self.fields

        if tag == "TY":
            self.record_type = RIS_TYPES.get(value, OTHER_TYPE)
        elif tag in ("T1", "TI"):
            self._append_title(value)
        elif tag == "BT":
            fields["booktitle"] = value
        elif tag in ("T2", "J2", "JA") and not fields.get("journal"):
            # Secondary title stands in for a journal that is not set yet
            fields["journal"] = value
        elif tag in ("JO", "J1", "JF"):
            fields["journal"] = value
        elif tag == "T3":
            fields["series"] = value
        elif tag in ("AU", "A1", "A2", "A3", "A4"):
            self.author = _join(self.author, " and ", value)
        elif tag == "ED":
            self.editor = _join(self.editor, " and ", value)
        elif tag in ("JA", "JF"):
            if self.record_type == "inproceedings":
                fields["booktitle"] = value
            else:
                fields["journal"] = value
        elif tag == "LA":
            fields["language"] = value
        elif tag == "CA":
            fields["caption"] = value
        elif tag == "DB":
            fields["database"] = value
        elif tag in ("IS", "AN", "C7", "M1"):
            fields["number"] = value
        elif tag == "SP":
            self.start_page = value
        elif tag == "PB":
            if self.record_type == "phdthesis":
                fields["school"] = value
            else:
                fields["publisher"] = value
        elif tag in ("AD", "CY", "PP"):
            fields["address"] = value
        elif tag == "EP":
            self.end_page = "--" + value if value else value
        elif tag == "ET":
            fields["edition"] = value
        elif tag == "SN":
            fields["issn"] = value
        elif tag == "VL":
            fields["volume"] = value
        elif tag in ("N2", "AB"):
            if "abstract" in fields:
                fields["abstract"] = fields["abstract"] + self.line_separator + value
            else:
                fields["abstract"] = value
        elif tag in ("UR", "L2", "LK"):
            fields["url"] = value
        elif tag in DATE_TAGS and len(value) >= 4:
            self._offer_date(tag, value)
        elif tag == "KW":
            if "keywords" in fields:
                fields["keywords"] = fields["keywords"] + ", " + value
            else:
                fields["keywords"] = value
        elif tag in ("U1", "U2", "N1"):
            self.comment = _join(self.comment, self.line_separator, value)
        elif tag in ("M3", "DO"):
            self._set_doi(value)
        elif tag == "C3":
            fields["eventtitle"] = value
        elif tag in ("N1", "RN"):
            fields["note"] = value
        elif tag == "ST":
            fields["shorttitle"] = value
        elif tag == "C2":
            fields["eprint"] = value
            fields["eprinttype"] = "pubmed"
        elif tag in _TRAILING_FIELDS:
            fields[_TRAILING_FIELDS[tag]] = value

    def build(
        self,
        resolve_type: Callable[[str], str],
        normalize_authors: Callable[[str], str],
        resolve_month: Callable[[int], Optional[Month]],
    ) -> Record:
        """Derive the computed fields, resolve the date and drop blank values."""
        fields = dict(self.fields)
        if self.author:
            fields["author"] = normalize_authors(self.author)
        if self.editor:
            fields["editor"] = normalize_authors(self.editor)
        if self.comment:
            fields["comment"] = self.comment
        fields["pages"] = self.start_page + self.end_page

        month = None
        if self.date_tag:
            fields["year"] = self.date_value[:4]
            month = self._resolve_month(resolve_month)

        fields = {k: v for k, v in fields.items() if v is not None and v.strip(TRIM_CHARS)}
        return Record(type=resolve_type(self.record_type), fields=fields, month=month)

    # ── helpers ───────────────────────────────────────────────────────────────

    def _append_title(self, value: str) -> None:
        old = self.fields.get("title")
        if old is None:
            title = value
        elif old.endswith((":", ".", "?")):
            title = old + " " + value
        else:
            title = old + ": " + value
        self.fields["title"] = _WHITESPACE_RE.sub(" ", title)

    def _offer_date(self, tag: str, value: str) -> None:
        rank = date_priority(tag)
        if rank >= self.date_rank:
            return
        if not is_year(value[:4]):
            logger.debug("Ignoring %s date %r: no four-digit year", tag, value)
            return
        self.date_tag = tag
        self.date_value = value
        self.date_rank = rank

    def _resolve_month(self, resolve_month: Callable[[int], Optional[Month]]) -> Optional[Month]:
        parts = self.date_value.split("/")
        if len(parts) < 2 or not parts[1]:
            return None
        if not _MONTH_RE.fullmatch(parts[1]):
            logger.debug("Ignoring unparseable month %r in %s date", parts[1], self.date_tag)
            return None
        return resolve_month(int(parts[1]))

    def _set_doi(self, value: str) -> None:
        doi = value.lower()
        if doi.startswith("doi:"):
            self.fields["doi"] = _DOI_PREFIX_RE.sub("", doi).strip(TRIM_CHARS)


def _join(current: str, separator: str, value: str) -> str:
    return current + separator + value if current else value
