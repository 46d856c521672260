"""In-memory line buffer.

A deliberately small storage engine: it holds the lines of the file being
edited, reads files or shell command output into the buffer and writes the
buffer back out. Text is decoded as UTF-8 with ``surrogateescape`` so that
arbitrary bytes survive a read followed by a write.
"""

from __future__ import annotations

import logging
import os
import stat
import subprocess
import sys
from enum import Enum
from typing import List, NamedTuple, Optional, TextIO

from .constants import EditorConstants, Messages
from .errors import ErrorSlot, Reporter

logger = logging.getLogger(__name__)

ENCODING = "utf-8"
ERRORS = "surrogateescape"


class _ReadFailure(Exception):
    """Input was opened but could not be read completely."""


class ReadStatus(Enum):
    LOADED = "loaded"
    OPEN_FAILED = "open_failed"  # file or command could not be opened
    READ_FAILED = "read_failed"  # opened, but reading failed


class ReadResult(NamedTuple):
    status: ReadStatus
    size: int = 0

    @property
    def ok(self) -> bool:
        return self.status is ReadStatus.LOADED


class LineBuffer:
    """Line storage with file and shell-command input."""

    def __init__(self, modes, errors: ErrorSlot, reporter: Reporter,
                 stdout: Optional[TextIO] = None):
        self.modes = modes
        self.errors = errors
        self.reporter = reporter
        self.stdout = stdout if stdout is not None else sys.stdout
        self.lines: List[str] = []
        self.current_addr = 0
        self.def_filename: Optional[str] = None

    def init_buffers(self) -> bool:
        """Reset the buffer to an empty document."""
        try:
            self.lines = []
        except MemoryError:
            self.errors.set(Messages.MEMORY_EXHAUSTED)
            return False
        self.current_addr = 0
        self.def_filename = None
        return True

    def last_addr(self) -> int:
        return len(self.lines)

    def _split_lines(self, data: bytes) -> List[str]:
        lines = data.decode(ENCODING, ERRORS).split('\n')
        if lines[-1] == '':
            lines.pop()
        if self.modes.strip_cr():
            lines = [line[:-1] if line.endswith('\r') else line for line in lines]
        return lines

    def _read_command(self, command: str) -> Optional[bytes]:
        try:
            proc = subprocess.run(command, shell=True, stdout=subprocess.PIPE)
        except OSError as e:
            self.reporter.show_strerror(EditorConstants.SHELL_PREFIX + command, e)
            self.errors.set(Messages.CANNOT_OPEN)
            return None
        if proc.returncode != 0:
            # A non-zero exit status still yields the output read so far
            logger.debug("command %r exited with status %d", command, proc.returncode)
        return proc.stdout

    def _read_path(self, filename: str) -> Optional[bytes]:
        try:
            f = open(filename, 'rb')
        except OSError as e:
            self.reporter.show_strerror(filename, e)
            self.errors.set(Messages.CANNOT_OPEN)
            return None
        try:
            with f:
                return f.read()
        except OSError as e:
            self.reporter.show_strerror(filename, e)
            self.errors.set(Messages.CANNOT_READ)
            raise _ReadFailure() from e

    def read_file(self, filename: str, addr: int = 0) -> ReadResult:
        """Read a file, or the output of ``!command``, after line ``addr``.

        Args:
            filename: Path to read, or '!' followed by a shell command.
            addr: Line number after which the text is inserted.

        Returns:
            ReadResult; the byte count is printed unless scripted.
        """
        try:
            if filename.startswith(EditorConstants.SHELL_PREFIX):
                data = self._read_command(filename[1:])
            else:
                data = self._read_path(filename)
        except _ReadFailure:
            return ReadResult(ReadStatus.READ_FAILED)
        if data is None:
            return ReadResult(ReadStatus.OPEN_FAILED)

        new_lines = self._split_lines(data)
        self.lines[addr:addr] = new_lines
        self.current_addr = addr + len(new_lines)
        size = sum(len(line.encode(ENCODING, ERRORS)) + 1 for line in new_lines)
        logger.debug("read %d lines (%d bytes) from %r", len(new_lines), size, filename)
        if not self.modes.scripted():
            self.stdout.write(f"{size}\n")
        return ReadResult(ReadStatus.LOADED, size)

    def set_def_filename(self, filename: str) -> bool:
        """Remember ``filename`` as the default for later writes."""
        if '\0' in filename or '\n' in filename:
            self.errors.set(Messages.INVALID_FILENAME)
            return False
        self.def_filename = filename
        return True

    def write_file(self, filename: str) -> Optional[int]:
        """Write the whole buffer to ``filename``.

        Returns:
            Number of bytes written, or None on failure.
        """
        data = ''.join(line + '\n' for line in self.lines).encode(ENCODING, ERRORS)
        try:
            with open(filename, 'wb') as f:
                f.write(data)
        except OSError as e:
            self.reporter.show_strerror(filename, e)
            self.errors.set(Messages.CANNOT_WRITE)
            return None
        return len(data)


def is_regular_file(fd: int) -> bool:
    """Return True if ``fd`` is a regular file or its status is unknown."""
    try:
        st = os.fstat(fd)
    except OSError:
        return True
    return stat.S_ISREG(st.st_mode)
