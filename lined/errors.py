"""Error taxonomy, the last-error slot and diagnostic output."""

from __future__ import annotations

import os
import sys
from typing import Optional, TextIO

from .constants import EditorConstants, ExitStatus


class EdError(Exception):
    """Base class for failures that end the process during startup.

    Attributes:
        exit_status: Process exit code reported for this failure.
        show_help_hint: Whether to suggest re-running with ``--help``.
        quiet: Whether the message is withheld in scripted mode.
    """

    exit_status = ExitStatus.ENVIRONMENT
    show_help_hint = False

    def __init__(self, message: str = "", quiet: bool = False):
        super().__init__(message)
        self.quiet = quiet


class UsageError(EdError):
    """Unrecognized option or missing option value."""

    show_help_hint = True


class StartupError(EdError):
    """Resource failure while setting up the editor."""


class CorruptInputError(EdError):
    """No usable input source at startup."""

    exit_status = ExitStatus.CORRUPT_INPUT


class InternalError(EdError):
    """Internal consistency error; indicates a bug."""

    exit_status = ExitStatus.INTERNAL


class ErrorSlot:
    """Holds the message of the most recent error.

    There is exactly one slot: each new error overwrites the previous
    message, so callers must read it before triggering another operation.
    """

    def __init__(self):
        self._message = ""

    def set(self, message: str) -> None:
        self._message = message

    @property
    def message(self) -> str:
        return self._message


class Reporter:
    """Writes diagnostics to the error stream.

    ``show_strerror`` is silenced while the scripted flag is set;
    ``show_error`` always writes.
    """

    def __init__(self, modes=None, stream: Optional[TextIO] = None,
                 invocation_name: str = EditorConstants.PROGRAM_NAME):
        self.modes = modes
        self.stream = stream if stream is not None else sys.stderr
        self.invocation_name = invocation_name

    def _silenced(self) -> bool:
        return self.modes is not None and self.modes.scripted()

    def show_strerror(self, filename: Optional[str], err: OSError) -> None:
        """Report an operating system error, prefixed by the filename."""
        if self._silenced():
            return
        text = err.strerror or os.strerror(err.errno or 0)
        if filename:
            self.stream.write(f"{filename}: {text}\n")
        else:
            self.stream.write(f"{text}\n")

    def show_error(self, msg: str, help_hint: bool = False,
                   quiet: bool = False) -> None:
        """Report a startup failure as ``program: msg``.

        With ``quiet`` the message is dropped while scripted.
        """
        if quiet and self._silenced():
            return
        if msg:
            self.stream.write(f"{EditorConstants.PROGRAM_NAME}: {msg}\n")
        if help_hint:
            self.stream.write(
                f"Try '{self.invocation_name} --help' for more information.\n"
            )


class CommandError(Exception):
    """A command in the edit loop failed; the message explains why."""
