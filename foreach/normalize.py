"""
Line normalization.

Responsibilities:
- strip the UTF-8 BOM from the first line
- strip a trailing carriage return (CRLF input)
- decode line bytes to text without changing them on the way to the child
- trim for emptiness detection and splitting
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional

from charset_normalizer import from_bytes

from .logging_config import get_logger
from .rules import CARRIAGE_RETURN, FIELD_BLANKS, LINE_FEED, UTF8_BOM

logger = get_logger(__name__)


def normalize_line(raw: bytes, first: bool) -> bytes:
    """
    Normalize one line as read from the input stream.

    Rules:
    - The line terminator (LF) is dropped if present.
    - On the first line only, a leading UTF-8 BOM is removed.
    - One trailing CR is removed.
    """
    if raw.endswith(LINE_FEED):
        raw = raw[:-1]
    if first and raw.startswith(UTF8_BOM):
        raw = raw[len(UTF8_BOM):]
    if raw.endswith(CARRIAGE_RETURN):
        raw = raw[:-1]
    return raw


def decode_line(raw: bytes, encoding: Optional[str] = None) -> str:
    """
    Decode line bytes to text.

    Rules:
    - Without an explicit encoding, decode with `os.fsdecode`, so the child
      receives exactly the bytes that were read (`os.fsencode` reverses it).
    - Where the filesystem codec is strict (Windows), undecodable bytes
      become replacement characters.
    - An explicit encoding transcodes the line; undecodable bytes become
      replacement characters.
    - charset-normalizer only feeds the DEBUG log; its guess is never used
      as argument text.
    """
    if encoding is None:
        try:
            text = os.fsdecode(raw)
        except UnicodeDecodeError:
            _report_undecodable(raw, sys.getfilesystemencoding())
            return raw.decode(sys.getfilesystemencoding(), errors="replace")
        if any("\udc80" <= ch <= "\udcff" for ch in text):
            _report_undecodable(raw, sys.getfilesystemencoding())
        return text

    try:
        return raw.decode(encoding)
    except UnicodeDecodeError:
        _report_undecodable(raw, encoding)
        return raw.decode(encoding, errors="replace")


def _report_undecodable(raw: bytes, encoding: str) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    match = from_bytes(raw).best()
    guess = match.encoding if match is not None else "unknown"
    logger.debug("line is not valid %s (looks like %s)", encoding, guess)


def trim(text: str) -> str:
    """Strip leading and trailing spaces and tabs only."""
    return text.strip(FIELD_BLANKS)
