from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, List, Optional, Sequence

from pydantic import ValidationError

from .config import get_settings
from .driver import run
from .logging_config import get_logger, setup_logging
from .models import RunConfig, SplitMode
from .rules import EXIT_FAILURE, EXIT_INTERRUPTED, PROGRAM_NAME, VERSION

logger = get_logger(__name__)

DESCRIPTION = "Execute a command once per input line."

EPILOG = """\
variable expansion:
  $1, $2, ...   positional fields from the input line
  $*            the entire input line
  $#            input line number (1-based)

If the command contains no $ placeholders, the input line is appended
as the final argument. If any placeholder is present, nothing is appended.

Fields are split on tabs by default; a line without tabs is one field.
Blank and whitespace-only lines are skipped.

examples:
  printf 'a\\nb\\n' | for-each echo
  printf 'x\\ty\\n' | for-each echo '$1 -> $2'
  ls *.md | for-each pandoc '$1' -o '$*.html'
"""


def _delimiter(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("delimiter must not be empty")
    return value[0]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description=DESCRIPTION,
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{PROGRAM_NAME} {VERSION}")
    parser.add_argument(
        "-s", "--space-delim",
        action="store_true",
        help="Split input fields on whitespace instead of tabs.",
    )
    parser.add_argument(
        "--delim",
        metavar="CHAR",
        type=_delimiter,
        help="Split input fields on the given character.",
    )
    parser.add_argument(
        "command",
        nargs=argparse.REMAINDER,
        help="Command and argument templates, run once per input line.",
    )
    return parser


def build_config(args: argparse.Namespace) -> RunConfig:
    command: List[str] = list(args.command)
    # argparse keeps a leading "--" in REMAINDER on some versions
    if command and command[0] == "--":
        command = command[1:]

    if args.space_delim:
        mode = SplitMode.WHITESPACE
    elif args.delim is not None:
        mode = SplitMode.CUSTOM_DELIMITER
    else:
        mode = SplitMode.TAB_OR_SINGLE_FIELD

    return RunConfig(split_mode=mode, delimiter=args.delim, command=command)


def cli(argv: Optional[Sequence[str]] = None, stdin: Optional[BinaryIO] = None) -> int:
    setup_logging()
    try:
        settings = get_settings()
    except ValidationError as exc:
        logger.error("invalid environment settings: %s", exc)
        return EXIT_FAILURE
    setup_logging(settings.log_level)

    args = build_parser().parse_args(argv)
    config = build_config(args)

    stream = stdin if stdin is not None else sys.stdin.buffer
    try:
        return run(config, stream, encoding=settings.input_encoding)
    except KeyboardInterrupt:
        return EXIT_INTERRUPTED


def main() -> None:
    sys.exit(cli())
