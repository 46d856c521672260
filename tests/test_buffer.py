"""Tests for the line buffer engine."""

import io
import os
import tempfile
from unittest.mock import mock_open, patch

import pytest

from lined.buffer import LineBuffer, ReadStatus, is_regular_file
from lined.errors import ErrorSlot, Reporter
from lined.modes import ModeRegistry


@pytest.fixture
def registry():
    return ModeRegistry()


@pytest.fixture
def buffer(registry):
    errors = ErrorSlot()
    stderr = io.StringIO()
    buf = LineBuffer(registry, errors, Reporter(registry, stderr), io.StringIO())
    buf.init_buffers()
    return buf


def write_temp(tmpdir, name, data):
    path = os.path.join(tmpdir, name)
    with open(path, 'wb') as f:
        f.write(data)
    return path


class TestReadFile:

    def test_reads_lines_and_prints_size(self, buffer):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_temp(tmpdir, "a.txt", b"one\ntwo\n")
            result = buffer.read_file(path)

        assert result.status is ReadStatus.LOADED
        assert result.size == 8
        assert buffer.lines == ["one", "two"]
        assert buffer.current_addr == 2
        assert buffer.stdout.getvalue() == "8\n"

    def test_unterminated_last_line(self, buffer):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_temp(tmpdir, "a.txt", b"one\ntwo")
            buffer.read_file(path)
        assert buffer.lines == ["one", "two"]

    def test_empty_file(self, buffer):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_temp(tmpdir, "empty.txt", b"")
            result = buffer.read_file(path)
        assert result.ok
        assert buffer.lines == []
        assert buffer.stdout.getvalue() == "0\n"

    def test_keeps_carriage_returns_by_default(self, buffer):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_temp(tmpdir, "dos.txt", b"a\r\nb\r\n")
            buffer.read_file(path)
        assert buffer.lines == ["a\r", "b\r"]

    def test_strip_trailing_cr(self, buffer, registry):
        registry.strip_cr(True)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_temp(tmpdir, "dos.txt", b"a\r\nb\r\n")
            buffer.read_file(path)
        assert buffer.lines == ["a", "b"]

    def test_scripted_suppresses_byte_count(self, buffer, registry):
        registry.scripted(True)
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_temp(tmpdir, "a.txt", b"one\n")
            buffer.read_file(path)
        assert buffer.stdout.getvalue() == ""

    def test_missing_file_is_open_failure(self, buffer):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "missing.txt")
            result = buffer.read_file(path)

        assert result.status is ReadStatus.OPEN_FAILED
        assert not result.ok
        assert buffer.errors.message == "Cannot open input file"
        assert buffer.reporter.stream.getvalue() == f"{path}: No such file or directory\n"
        assert buffer.stdout.getvalue() == ""

    def test_missing_file_silent_when_scripted(self, buffer, registry):
        registry.scripted(True)
        with tempfile.TemporaryDirectory() as tmpdir:
            buffer.read_file(os.path.join(tmpdir, "missing.txt"))
        assert buffer.reporter.stream.getvalue() == ""

    def test_directory_is_open_failure(self, buffer):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = buffer.read_file(tmpdir)
        assert result.status is ReadStatus.OPEN_FAILED

    def test_undecodable_bytes_round_trip(self, buffer):
        data = b"caf\xe9\n\xff\xfe\n"
        with tempfile.TemporaryDirectory() as tmpdir:
            path = write_temp(tmpdir, "latin.txt", data)
            buffer.read_file(path)
            out = os.path.join(tmpdir, "out.txt")
            assert buffer.write_file(out) == len(data)
            with open(out, 'rb') as f:
                assert f.read() == data

    def test_shell_command_output(self, buffer):
        result = buffer.read_file("!printf 'x\\ny\\n'")
        assert result.ok
        assert buffer.lines == ["x", "y"]

    def test_failing_shell_command_keeps_output(self, buffer):
        result = buffer.read_file("!echo partial; exit 3")
        assert result.status is ReadStatus.LOADED
        assert buffer.lines == ["partial"]

    def test_silent_failing_shell_command_loads_nothing(self, buffer):
        result = buffer.read_file("!false")
        assert result.ok
        assert buffer.lines == []

    def test_unreadable_file_is_read_failure(self, buffer):
        opener = mock_open()
        opener.return_value.read.side_effect = OSError(5, "Input/output error")
        with patch("lined.buffer.open", opener, create=True):
            result = buffer.read_file("a.txt")
        assert result.status is ReadStatus.READ_FAILED
        assert buffer.errors.message == "Cannot read input file"

    def test_insert_after_address(self, buffer):
        buffer.lines = ["first", "last"]
        buffer.read_file("!echo middle", addr=1)
        assert buffer.lines == ["first", "middle", "last"]
        assert buffer.current_addr == 2


class TestDefaultFilename:

    def test_set_def_filename(self, buffer):
        assert buffer.set_def_filename("notes.txt")
        assert buffer.def_filename == "notes.txt"

    @pytest.mark.parametrize("name", ["bad\nname", "bad\0name"])
    def test_rejects_invalid_names(self, buffer, name):
        assert not buffer.set_def_filename(name)
        assert buffer.def_filename is None
        assert buffer.errors.message == "Invalid filename"

    def test_init_buffers_resets(self, buffer):
        buffer.lines = ["x"]
        buffer.set_def_filename("x.txt")
        assert buffer.init_buffers()
        assert buffer.lines == []
        assert buffer.def_filename is None


class TestWriteFile:

    def test_write_file(self, buffer):
        buffer.lines = ["a", "b"]
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "out.txt")
            assert buffer.write_file(path) == 4
            with open(path, 'rb') as f:
                assert f.read() == b"a\nb\n"

    def test_write_failure(self, buffer):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, "no", "such", "dir.txt")
            assert buffer.write_file(path) is None
        assert buffer.errors.message == "Cannot open output file"


class TestIsRegularFile:

    def test_regular_file(self):
        with tempfile.TemporaryFile() as f:
            assert is_regular_file(f.fileno())

    def test_pipe(self):
        r, w = os.pipe()
        try:
            assert not is_regular_file(r)
        finally:
            os.close(r)
            os.close(w)

    def test_unknown_status_counts_as_regular(self):
        assert is_regular_file(-1)
