"""
Child process creation.

One blocking operation, `launch(argv) -> exit status`, with a POSIX and a
Windows variant. The driver gets one from `get_launcher()` and never checks
the platform itself.
"""

from __future__ import annotations

import errno
import os
import subprocess
from abc import ABC, abstractmethod
from typing import Sequence

from .errors import LaunchError
from .logging_config import get_logger
from .rules import EXIT_EXEC_FAILED

logger = get_logger(__name__)

# Errors from the exec step itself; the fork already succeeded.
_EXEC_ERRNOS = frozenset({
    errno.ENOENT,
    errno.EACCES,
    errno.ENOTDIR,
    errno.ENOEXEC,
    errno.ELOOP,
    errno.ENAMETOOLONG,
})


def quote_windows_arg(arg: str) -> str:
    """
    Quote one argument for the Windows command-line parser.

    The argument is always wrapped in double quotes. A `"` gets a backslash
    in front of it, and any backslashes directly before a `"` or before the
    closing quote are doubled. Other backslashes are literal.
    """
    out = ['"']
    backslashes = 0
    for ch in arg:
        if ch == "\\":
            backslashes += 1
            continue
        if ch == '"':
            out.append("\\" * (backslashes * 2 + 1))
        elif backslashes:
            out.append("\\" * backslashes)
        out.append(ch)
        backslashes = 0
    out.append("\\" * (backslashes * 2))
    out.append('"')
    return "".join(out)


def build_windows_command_line(argv: Sequence[str]) -> str:
    return " ".join(quote_windows_arg(arg) for arg in argv)


def c_string(arg: str) -> str:
    """Cut an argument at its first NUL, as the OS will see it."""
    return arg.partition("\0")[0]


class ProcessLauncher(ABC):
    @abstractmethod
    def launch(self, argv: Sequence[str]) -> int:
        """Run `argv` as a child process and block until it exits.

        Returns the child's exit status. Raises LaunchError if the child
        could not be created at all.
        """


class PosixLauncher(ProcessLauncher):
    def launch(self, argv: Sequence[str]) -> int:
        try:
            proc = subprocess.Popen([c_string(arg) for arg in argv])
        except OSError as exc:
            if exc.errno in _EXEC_ERRNOS:
                logger.warning("%s: %s", argv[0], os.strerror(exc.errno))
                return EXIT_EXEC_FAILED
            raise LaunchError(f"fork: {exc}") from exc
        return proc.wait()


class WindowsLauncher(ProcessLauncher):
    def launch(self, argv: Sequence[str]) -> int:
        command_line = build_windows_command_line([c_string(arg) for arg in argv])
        try:
            proc = subprocess.Popen(command_line)
        except OSError as exc:
            raise LaunchError(f"CreateProcess failed: {exc}") from exc
        return proc.wait()


def get_launcher() -> ProcessLauncher:
    if os.name == "nt":
        return WindowsLauncher()
    return PosixLauncher()
