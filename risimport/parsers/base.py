"""
Shared types for the RIS parsers.

ParseResult is the single return type from the byte-level entry points
(``parse_file`` and ``ris.parse_tolerant``).  Record is what the importer
emits, one per entry in the file, in file order.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Mapping, NamedTuple, Optional

from risimport.utils.months import Month


class StreamError(OSError):
    """Reading lines from the input stream failed.  Aborts the whole import."""


class TagValue(NamedTuple):
    """One logical RIS line: 2-character tag plus its (joined, trimmed) value."""
    tag: str
    value: str


@dataclass(frozen=True)
class Record:
    """
    One imported bibliographic entry.

    ``fields`` never holds an empty or whitespace-only value.  ``month`` is
    kept apart from ``fields`` because it is a symbol, not free text.

    Records are read-only: ``fields`` is a read-only view over a private
    copy of the mapping passed in, so neither the caller nor a consumer can
    change it afterwards.  Records compare by value but are not hashable.
    """
    type: str
    fields: Mapping[str, str] = field(default_factory=dict)
    month: Optional[Month] = None

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(name, default)


@dataclass
class ParseResult:
    """
    Result of parsing a whole file.

    ``total_attempted`` counts the record bodies found by the splitter; every
    one of them yields a Record, so it always equals ``valid_count`` for RIS
    input and is 0 when the format was not recognized.
    """
    records: List[Record]
    format_detected: str    # "ris" | "unknown"
    total_attempted: int
    warnings: List[str] = field(default_factory=list)  # file-level issues

    @property
    def valid_count(self) -> int:
        return len(self.records)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    def summary(self) -> str:
        """Short human-readable summary, suitable for a job log or UI banner."""
        parts: list[str] = []
        if self.valid_count == 0:
            parts.append(
                f"No records found in {self.format_detected!r} file."
            )
        else:
            parts.append(
                f"{self.valid_count} record(s) imported"
                + (f" from {self.format_detected.upper()} format" if self.format_detected != "unknown" else "")
                + "."
            )

        if self.warnings:
            parts.append("Warnings: " + "; ".join(self.warnings))

        return "\n".join(parts)
