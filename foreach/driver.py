"""
The per-line loop: read, normalize, split, expand, launch, wait.

`iter_commands` yields the argument vector for every qualifying line and is
free of side effects; `process_stream` launches them one at a time; `run`
wraps it and turns fatal errors into an exit status.
"""

from __future__ import annotations

from typing import BinaryIO, Iterator, List, Optional

from .errors import ConfigurationError, ForEachError
from .expand import expand_command, implicit_append
from .fields import make_splitter
from .launcher import ProcessLauncher, get_launcher
from .logging_config import get_logger
from .models import LineContext, RunConfig
from .normalize import decode_line, normalize_line, trim
from .rules import EXIT_FAILURE, EXIT_OK

logger = get_logger(__name__)


def iter_commands(config: RunConfig, stream: BinaryIO, encoding: Optional[str] = None) -> Iterator[List[str]]:
    if not config.command:
        raise ConfigurationError("no command given")

    split = make_splitter(config)
    append_raw = implicit_append(config.command)

    line_no = 0
    for chunk in stream:
        line_no += 1
        raw = decode_line(normalize_line(chunk, first=line_no == 1), encoding)

        text = trim(raw)
        if not text:
            continue

        fields = split(text)
        if not fields:
            continue

        line = LineContext(raw=raw, text=text, line_no=line_no, fields=fields)
        yield expand_command(config.command, line, append_raw)


def process_stream(
    config: RunConfig,
    stream: BinaryIO,
    launcher: Optional[ProcessLauncher] = None,
    encoding: Optional[str] = None,
) -> None:
    """Launch one child per qualifying line, waiting for each before reading on.

    Child exit statuses are ignored. Raises ConfigurationError for an empty
    command template and LaunchError if a child cannot be created.
    """
    launcher = launcher or get_launcher()
    for argv in iter_commands(config, stream, encoding):
        status = launcher.launch(argv)
        if status != 0:
            logger.debug("%s exited with status %d", argv[0], status)


def run(
    config: RunConfig,
    stream: BinaryIO,
    launcher: Optional[ProcessLauncher] = None,
    encoding: Optional[str] = None,
) -> int:
    try:
        process_stream(config, stream, launcher, encoding)
    except ForEachError as exc:
        logger.error("%s", exc)
        return EXIT_FAILURE
    return EXIT_OK
