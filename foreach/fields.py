from __future__ import annotations

import re
from typing import Callable, List

from .models import RunConfig, SplitMode
from .normalize import trim
from .rules import TAB

Splitter = Callable[[str], List[str]]

_BLANK_RUN = re.compile(r"[ \t]+")


def split_whitespace(text: str) -> List[str]:
    return [token for token in _BLANK_RUN.split(text) if token]


def split_delimited(text: str, delimiter: str) -> List[str]:
    """Split on every delimiter, trimming each field; empty fields are kept."""
    return [trim(field) for field in text.split(delimiter)]


def split_tab_or_single(text: str) -> List[str]:
    if TAB in text:
        return split_delimited(text, TAB)
    return [text]


def make_splitter(config: RunConfig) -> Splitter:
    """
    Pick the split function for the run.

    Whitespace mode wins over a configured delimiter, and either wins over
    the tab default. Input is expected to be trimmed and non-empty already.
    """
    if config.split_mode is SplitMode.WHITESPACE:
        return split_whitespace
    if config.split_mode is SplitMode.CUSTOM_DELIMITER:
        delimiter = config.delimiter
        return lambda text: split_delimited(text, delimiter)
    return split_tab_or_single
