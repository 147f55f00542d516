"""
Placeholder expansion for command-template tokens.

    $1, $2, ...   field N of the current line (1-based, empty if out of range)
    $*            the whole raw line
    $#            the line number (1-based)

Any other `$` is copied through literally.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from .models import LineContext
from .rules import LINE_NUMBER_MARK, PLACEHOLDER_SIGIL, RAW_LINE_MARK

# ASCII digits only; \d would also match other Unicode digits
_PLACEHOLDER = re.compile(
    re.escape(PLACEHOLDER_SIGIL)
    + f"({re.escape(RAW_LINE_MARK)}|{re.escape(LINE_NUMBER_MARK)}|[0-9]+)"
)


def has_placeholder(template: Sequence[str]) -> bool:
    return any(_PLACEHOLDER.search(token) for token in template)


def expand_token(token: str, line: LineContext) -> str:
    def substitute(match: re.Match) -> str:
        mark = match.group(1)
        if mark == RAW_LINE_MARK:
            return line.raw
        if mark == LINE_NUMBER_MARK:
            return str(line.line_no)
        index = int(mark)
        if 1 <= index <= len(line.fields):
            return line.fields[index - 1]
        return ""

    return _PLACEHOLDER.sub(substitute, token)


def expand_command(template: Sequence[str], line: LineContext, append_raw: bool) -> List[str]:
    """
    Build the argument vector for one line.

    `append_raw` is the implicit-argument decision, made once per run with
    `implicit_append(template)`; it is not re-evaluated here.
    """
    command = [expand_token(token, line) for token in template]
    if append_raw:
        command.append(line.raw)
    return command


def implicit_append(template: Sequence[str]) -> bool:
    """True when the raw line should be appended to every command."""
    return not has_placeholder(template)
