"""lined CLI entry point.

Allows running via `python -m lined` and provides the `lined` and
`rlined` console scripts defined in `pyproject.toml`.
"""

from __future__ import annotations

import os
import sys

from .bootstrap import Startup
from .constants import EditorConstants
from .debug_log import configure_logging


def _invocation_name() -> str:
    name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    if not name or name == "__main__.py":
        return EditorConstants.PROGRAM_NAME
    return name


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    configure_logging()

    return Startup(invocation_name=_invocation_name()).run(argv)


def main_restricted(argv: list[str] | None = None) -> int:
    """Same as main(), always in restricted mode."""
    if argv is None:
        argv = sys.argv[1:]
    return main(["--restricted", *argv])


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
