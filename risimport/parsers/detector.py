"""
Format detection for RIS input.

Two levels:
  is_recognized(source) — line-level check used by the importer: true as soon
                          as one line is a start-of-record marker ("TY  - ").
  detect_format(bytes)  — byte-level check for uploads; decodes the first
                          ``settings.sniff_bytes`` bytes and returns
                          "ris" or "unknown".

Encoding: we try utf-8-sig → utf-8 → latin-1. Latin-1 never fails, so it
serves as a universal fallback for exports that use ISO-8859-1.
"""
from __future__ import annotations

import re
from typing import Iterable, Literal, Union

from risimport.config import settings

FormatStr = Literal["ris", "unknown"]

# Start-of-record marker: TY, two spaces, dash, space, anything
_RIS_START_RE = re.compile(r"^TY  - ")

_BOM = "\ufeff"

# Line terminators recognised by a line reader
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


def read_text(data: bytes) -> str:
    """
    Decode bytes to a Unicode string, trying common encodings in order.

    Encoding priority:
      1. utf-8-sig — UTF-8 with optional BOM.
      2. utf-8 — Plain UTF-8 without BOM.
      3. latin-1 — ISO-8859-1; never raises.

    CRLF and bare CR line endings are normalized to LF.
    """
    for encoding in ("utf-8-sig", "utf-8"):
        try:
            text = data.decode(encoding)
            return text.replace("\r\n", "\n").replace("\r", "\n")
        except UnicodeDecodeError:
            continue
    # Latin-1 is a universal fallback — all 256 byte values are valid
    text = data.decode("latin-1")
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_lines(text: str) -> list[str]:
    """Split text into lines at \\n, \\r\\n or \\r; a final terminator adds no empty line."""
    lines = _LINE_BREAK_RE.split(text)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def is_start_line(line: str) -> bool:
    return bool(_RIS_START_RE.match(line))


def is_recognized(source: Union[str, Iterable[str]]) -> bool:
    """
    Return True if any line of ``source`` is a start-of-record marker.

    ``source`` may be a whole text or an iterable of lines.  A seekable text
    stream is rewound to where it was, so the same stream can be handed to
    the importer afterwards; a non-seekable iterable is consumed up to the
    first match.
    """
    if isinstance(source, str):
        return any(is_start_line(line) for line in split_lines(_strip_bom(source)))

    seekable = getattr(source, "seekable", None)
    if seekable is not None and seekable():
        position = source.tell()
        try:
            return _scan(source)
        finally:
            source.seek(position)
    return _scan(source)


def detect_format(file_bytes: bytes) -> FormatStr:
    """
    Inspect file content and return the detected format string.

    Args:
        file_bytes: Raw bytes from the uploaded file (may be partial).

    Returns:
        "ris" or "unknown".
    """
    if not file_bytes:
        return "unknown"

    text = read_text(file_bytes[:settings.sniff_bytes])
    if is_recognized(text):
        return "ris"
    return "unknown"


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith(_BOM) else text


def _scan(lines: Iterable[str]) -> bool:
    for i, line in enumerate(lines):
        line = line.rstrip("\r\n")
        if i == 0:
            line = _strip_bom(line)
        if is_start_line(line):
            return True
    return False
