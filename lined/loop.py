"""Minimal command loop.

Only session-control commands are understood here: quitting, prompt and
help toggles, the default filename, writing the buffer, the line count
and shell escapes. Anything else is reported as an unknown command.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from typing import Optional, TextIO

from .access import may_access_filename
from .buffer import LineBuffer, is_regular_file
from .constants import EditorConstants, Messages
from .errors import CommandError, ErrorSlot
from .modes import Modes

logger = logging.getLogger(__name__)


class _Quit(Exception):
    pass


class CommandLoop:
    """Reads commands from stdin until quit or end of input."""

    def __init__(self, buffer: LineBuffer, errors: ErrorSlot,
                 stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None,
                 stdin_fd: int = 0):
        self.buffer = buffer
        self.errors = errors
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stdin_fd = stdin_fd
        self.modes = Modes()
        self.prompt = EditorConstants.DEFAULT_PROMPT
        self.prompt_on = False
        self.verbose = False
        self.line_number = 0

    def set_prompt(self, text: str) -> bool:
        """Use ``text`` as the prompt and turn prompting on."""
        if '\n' in text:
            self.errors.set(Messages.INVALID_PROMPT)
            return False
        self.prompt = text
        self.prompt_on = True
        return True

    def set_verbose(self) -> None:
        """Explain errors as they happen, like the 'H' command."""
        self.verbose = True

    def use_modes(self, modes: Modes) -> None:
        self.modes = modes

    def _explain(self) -> None:
        if self.errors.message:
            self.stdout.write(f"{self.errors.message}\n")

    def _check_name(self, name: str) -> None:
        if not may_access_filename(name, self.modes.restricted, self.errors):
            raise CommandError(self.errors.message)

    def _no_suffix(self, suffix: str) -> None:
        if suffix.strip():
            raise CommandError(Messages.UNEXPECTED_SUFFIX)

    def _filename(self, suffix: str) -> None:
        name = suffix.strip()
        if name:
            self._check_name(name)
            if name.startswith(EditorConstants.SHELL_PREFIX):
                raise CommandError(Messages.INVALID_FILENAME)
            if not self.buffer.set_def_filename(name):
                raise CommandError(self.errors.message)
        if self.buffer.def_filename is None:
            raise CommandError(Messages.NO_FILENAME)
        self.stdout.write(f"{self.buffer.def_filename}\n")

    def _write(self, suffix: str) -> None:
        name = suffix.strip() or self.buffer.def_filename
        if not name:
            raise CommandError(Messages.NO_FILENAME)
        self._check_name(name)
        if name.startswith(EditorConstants.SHELL_PREFIX):
            raise CommandError(Messages.INVALID_FILENAME)
        if self.buffer.def_filename is None and not self.buffer.set_def_filename(name):
            raise CommandError(self.errors.message)
        size = self.buffer.write_file(name)
        if size is None:
            raise CommandError(self.errors.message)
        if not self.modes.scripted:
            self.stdout.write(f"{size}\n")

    def _shell(self, command: str) -> None:
        if self.modes.restricted:
            raise CommandError(Messages.SHELL_RESTRICTED)
        self.stdout.flush()
        try:
            subprocess.run(command, shell=True)
        except OSError as e:
            raise CommandError(str(e)) from e
        if not self.modes.scripted:
            self.stdout.write(f"{EditorConstants.SHELL_DONE_MARKER}\n")

    def execute(self, line: str) -> None:
        """Run one command line.

        Raises:
            CommandError: The command failed.
        """
        command, suffix = line[:1], line[1:]
        if command in ('q', 'Q'):
            self._no_suffix(suffix)
            raise _Quit()
        elif command == 'P':
            self._no_suffix(suffix)
            self.prompt_on = not self.prompt_on
        elif command == 'H':
            self._no_suffix(suffix)
            self.verbose = not self.verbose
            if self.verbose:
                self._explain()
        elif command == 'h':
            self._no_suffix(suffix)
            self._explain()
        elif command == '=':
            self._no_suffix(suffix)
            self.stdout.write(f"{self.buffer.last_addr()}\n")
        elif command == 'f':
            self._filename(suffix)
        elif command == 'w':
            self._write(suffix)
        elif command == EditorConstants.SHELL_PREFIX:
            self._shell(suffix)
        else:
            raise CommandError(Messages.UNKNOWN_COMMAND)

    def main_loop(self, initial_error: bool, loose: bool) -> int:
        """Run commands until quit or end of input.

        Args:
            initial_error: Startup recorded an error before the loop began.
            loose: Report success even if commands fail.

        Returns:
            Process exit status: 1 if any failure was recorded, else 0.
        """
        err_status = 1 if initial_error and not loose else 0
        if initial_error and self.verbose:
            self._explain()

        while True:
            if self.prompt_on:
                self.stdout.write(self.prompt)
                self.stdout.flush()
            line = self.stdin.readline()
            if not line:
                return err_status
            self.line_number += 1
            try:
                self.execute(line.rstrip('\n'))
            except _Quit:
                return err_status
            except CommandError as e:
                logger.debug("command %r failed: %s", line, e)
                self.errors.set(str(e))
                self.stdout.write(f"{EditorConstants.ERROR_MARKER}\n")
                if not loose:
                    err_status = 1
                if is_regular_file(self.stdin_fd):
                    if self.verbose:
                        self.stdout.write(f"script, line {self.line_number}: {e}\n")
                    return err_status
                if self.verbose:
                    self._explain()
            finally:
                self.stdout.flush()
