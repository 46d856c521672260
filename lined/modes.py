"""Process-wide editing modes.

The registry is filled in while the command line is processed and is then
only read. Each flag starts out False and is switched on at most once;
nothing resets it. Once bootstrap is complete a frozen ``Modes`` snapshot is
handed to the command loop.
"""

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class Modes:
    """Immutable view of the mode flags after startup."""

    extended_regexp: bool = False
    restricted: bool = False
    scripted: bool = False
    strip_cr: bool = False
    traditional: bool = False


@dataclass
class StartupOptions:
    """Settings that only matter while starting up."""

    loose: bool = False  # exit 0 even if a command fails
    verbose: bool = False
    prompt: Optional[str] = None


class ModeRegistry:
    """Holds the persistent mode flags.

    Every accessor doubles as a setter: called without an argument it
    returns the current value, called with one it stores and returns it.
    Writes are only expected during startup.
    """

    def __init__(self):
        self._flags = Modes()

    def _get_or_set(self, name: str, new_value: Optional[bool]) -> bool:
        if new_value is not None:
            self._flags = replace(self._flags, **{name: bool(new_value)})
        return getattr(self._flags, name)

    def extended_regexp(self, new_value: Optional[bool] = None) -> bool:
        """Use extended regular expressions."""
        return self._get_or_set("extended_regexp", new_value)

    def restricted(self, new_value: Optional[bool] = None) -> bool:
        """Confine file access to the current directory, no shell."""
        return self._get_or_set("restricted", new_value)

    def scripted(self, new_value: Optional[bool] = None) -> bool:
        """Suppress diagnostics, byte counts and the '!' prompt."""
        return self._get_or_set("scripted", new_value)

    def strip_cr(self, new_value: Optional[bool] = None) -> bool:
        """Strip trailing carriage returns when reading."""
        return self._get_or_set("strip_cr", new_value)

    def traditional(self, new_value: Optional[bool] = None) -> bool:
        """Be backwards compatible."""
        return self._get_or_set("traditional", new_value)

    def snapshot(self) -> Modes:
        return self._flags
