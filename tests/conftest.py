import io
from unittest.mock import patch

import pytest

from lined.bootstrap import Startup


class Harness:
    """A Startup wired to in-memory streams."""

    def __init__(self, stdin_text="", stdin_regular=False):
        self.stdin = io.StringIO(stdin_text)
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.stdin_regular = stdin_regular
        self.startup = Startup(stdin=self.stdin, stdout=self.stdout, stderr=self.stderr)

    def run(self, *argv):
        with patch("lined.bootstrap.is_regular_file", return_value=self.stdin_regular), \
                patch("lined.loop.is_regular_file", return_value=self.stdin_regular):
            return self.startup.run(list(argv))

    @property
    def out(self):
        return self.stdout.getvalue()

    @property
    def err(self):
        return self.stderr.getvalue()


@pytest.fixture
def harness():
    """Factory for Startup harnesses: harness(stdin_text, stdin_regular)."""
    return Harness
