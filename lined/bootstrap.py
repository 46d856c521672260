"""Startup sequence: options, modes, initial file, exit status.

Exit status: 0 for a normal exit, 1 for environmental problems (file not
found, invalid flags, I/O errors, etc), 2 to indicate a corrupt or invalid
input file, 3 for an internal consistency error (e.g., bug).
"""

from __future__ import annotations

import locale
import logging
import sys
from enum import Enum
from typing import NamedTuple, Optional, Sequence, TextIO

from .access import may_access_filename
from .buffer import LineBuffer, ReadStatus, is_regular_file
from .constants import EditorConstants, ExitStatus, Messages
from .errors import (
    CorruptInputError,
    EdError,
    ErrorSlot,
    InternalError,
    Reporter,
    StartupError,
)
from .loop import CommandLoop
from .modes import ModeRegistry, StartupOptions
from .options import OptionCode, ParsedOption, build_parser, classify, help_text
from .version import version_text

logger = logging.getLogger(__name__)


class InitialLoad(Enum):
    CLEAN = "clean"
    PENDING_ERROR = "pending_error"  # start the loop with an error recorded
    ABORT = "abort"  # exit before reaching the loop


class InitialLoadOutcome(NamedTuple):
    kind: InitialLoad
    error: Optional[EdError] = None  # raised on ABORT


CLEAN = InitialLoadOutcome(InitialLoad.CLEAN)
PENDING_ERROR = InitialLoadOutcome(InitialLoad.PENDING_ERROR)


class Startup:
    """Takes the process from its arguments to the command loop.

    The mode registry is written only while options and the positional
    arguments are processed; the command loop gets a frozen snapshot.
    """

    def __init__(self, stdin: Optional[TextIO] = None,
                 stdout: Optional[TextIO] = None,
                 stderr: Optional[TextIO] = None,
                 stdin_fd: int = 0,
                 invocation_name: str = EditorConstants.PROGRAM_NAME):
        self.stdout = stdout if stdout is not None else sys.stdout
        self.stdin_fd = stdin_fd
        self.invocation_name = invocation_name
        self.registry = ModeRegistry()
        self.options = StartupOptions()
        self.errors = ErrorSlot()
        self.reporter = Reporter(self.registry, stderr, invocation_name)
        self.buffer = LineBuffer(self.registry, self.errors, self.reporter, self.stdout)
        self.loop = CommandLoop(self.buffer, self.errors, stdin, self.stdout, stdin_fd)

    def run(self, argv: Sequence[str]) -> int:
        """Run the editor and return the process exit status.

        Args:
            argv: Command line arguments, without the program name.
        """
        try:
            return self._run(argv)
        except EdError as e:
            self.reporter.show_error(str(e), e.show_help_hint, quiet=e.quiet)
            return e.exit_status

    def _run(self, argv: Sequence[str]) -> int:
        parser = build_parser()
        classified = classify(argv, parser)

        for option in classified.options:
            if self.dispatch(option):
                return ExitStatus.OK

        self._apply_locale()
        if not self.buffer.init_buffers():
            raise StartupError(self.errors.message)

        outcome = self.load_initial_file(classified.arguments)
        del parser, classified

        if outcome.kind is InitialLoad.ABORT:
            logger.debug("aborting startup with status %d", outcome.error.exit_status)
            raise outcome.error

        initial_error = outcome.kind is InitialLoad.PENDING_ERROR
        if initial_error:
            self.stdout.write(f"{EditorConstants.ERROR_MARKER}\n")
            self.stdout.flush()

        self.loop.use_modes(self.registry.snapshot())
        return self.loop.main_loop(initial_error, self.options.loose)

    def dispatch(self, option: ParsedOption) -> bool:
        """Apply one option.

        Returns:
            True if the option is terminal and the process should exit 0.

        Raises:
            StartupError: The prompt could not be set.
            InternalError: The option code has no handler.
        """
        code = option.code
        if code is OptionCode.EXTENDED_REGEXP:
            self.registry.extended_regexp(True)
        elif code is OptionCode.TRADITIONAL:
            self.registry.traditional(True)
        elif code is OptionCode.HELP:
            self.stdout.write(help_text(self.invocation_name))
            return True
        elif code is OptionCode.LOOSE_EXIT_STATUS:
            self.options.loose = True
        elif code is OptionCode.PROMPT:
            if not self.loop.set_prompt(option.value):
                raise StartupError(self.errors.message, quiet=True)
            self.options.prompt = option.value
        elif code is OptionCode.RESTRICTED:
            self.registry.restricted(True)
        elif code is OptionCode.SCRIPTED:
            self.registry.scripted(True)
        elif code is OptionCode.VERBOSE:
            self.options.verbose = True
            self.loop.set_verbose()
        elif code is OptionCode.VERSION:
            self.stdout.write(version_text())
            return True
        elif code is OptionCode.STRIP_TRAILING_CR:
            self.registry.strip_cr(True)
        else:
            raise InternalError(Messages.UNCAUGHT_OPTION)
        return False

    def _apply_locale(self) -> None:
        try:
            locale.setlocale(locale.LC_ALL, "")
        except locale.Error as e:
            logger.info("locale not applied: %s", e)

    def _stdin_is_regular(self) -> bool:
        return is_regular_file(self.stdin_fd)

    def load_initial_file(self, arguments: Sequence[str]) -> InitialLoadOutcome:
        """Handle the positional arguments.

        A '-' switches to scripted mode and moves on; the first other
        argument is the file to start with, and later ones are ignored.
        """
        for arg in arguments:
            if arg == EditorConstants.STDIN_ARGUMENT:
                self.registry.scripted(True)
                continue
            return self._load(arg)
        return CLEAN

    def _load(self, name: str) -> InitialLoadOutcome:
        if not may_access_filename(name, self.registry.restricted(), self.errors):
            # Nothing was read; with a script on stdin there is no input left.
            if self._stdin_is_regular():
                return InitialLoadOutcome(InitialLoad.ABORT, CorruptInputError())
            return PENDING_ERROR

        result = self.buffer.read_file(name)
        if not result.ok and self._stdin_is_regular():
            return InitialLoadOutcome(InitialLoad.ABORT, CorruptInputError())
        if (not name.startswith(EditorConstants.SHELL_PREFIX)
                and not self.buffer.set_def_filename(name)):
            return InitialLoadOutcome(
                InitialLoad.ABORT, StartupError(self.errors.message, quiet=True))
        if result.status is ReadStatus.OPEN_FAILED:
            return PENDING_ERROR
        return CLEAN


def run(argv: Sequence[str], **kwargs) -> int:
    return Startup(**kwargs).run(argv)
