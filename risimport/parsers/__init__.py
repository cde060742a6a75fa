"""
Parser package public API.

``parse_file(file_bytes)`` is the byte-level entry point: it detects the
format and dispatches to the RIS parser, returning a ParseResult for any
input.

``ris.parse()`` / ``ris.RisImporter`` are the text-level entry points for
callers that already hold decoded text or an open text stream.
"""
import logging

from risimport.parsers.base import ParseResult, Record, StreamError, TagValue
from risimport.parsers.detector import detect_format, is_recognized, read_text
from risimport.parsers import ris
from risimport.parsers.ris import RisImporter

logger = logging.getLogger(__name__)


def parse_file(file_bytes: bytes) -> ParseResult:
    """
    Detect format and parse file_bytes into a ParseResult.

    Never raises.  Supported formats:
      ris     — Research Information Systems tagged format (.ris, some .txt)
      unknown — no "TY  - " start-of-record line in the sniffed bytes
    """
    fmt = detect_format(file_bytes)

    if fmt == "ris":
        return ris.parse_tolerant(file_bytes)

    logger.warning("Unsupported format for %d byte(s) of input", len(file_bytes))
    return ParseResult(
        records=[],
        format_detected="unknown",
        total_attempted=0,
        warnings=[
            "Unsupported format. Expected RIS (a line starting with 'TY  - ')."
        ],
    )


__all__ = [
    "ParseResult",
    "Record",
    "RisImporter",
    "StreamError",
    "TagValue",
    "detect_format",
    "is_recognized",
    "parse_file",
    "read_text",
]
