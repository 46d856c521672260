"""Optional debug logging to a file.

The editor's stdout and stderr carry its user-visible contract, so log
records never go there. When ``LINED_DEBUG`` is set, DEBUG records for the
``lined`` package are written to a file in the user log directory.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

import platformdirs

from .constants import EditorConstants

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(process)d %(name)s %(levelname)s: %(message)s"


def default_log_path() -> Path:
    log_dir = Path(platformdirs.user_log_dir(EditorConstants.PROGRAM_NAME, appauthor=False))
    return log_dir / EditorConstants.LOG_FILE_NAME


def configure_logging(environ: Optional[Mapping[str, str]] = None) -> Optional[Path]:
    """Attach a file handler to the package logger if debugging is enabled.

    Args:
        environ: Environment to consult; defaults to ``os.environ``.

    Returns:
        Path of the log file, or None if logging stays off.
    """
    if environ is None:
        environ = os.environ
    if not environ.get(EditorConstants.DEBUG_ENV):
        return None

    override = environ.get(EditorConstants.LOG_FILE_ENV)
    log_path = Path(override) if override else default_log_path()
    package_logger = logging.getLogger("lined")

    try:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError as e:
        logger.warning(f"Could not open debug log {log_path}: {e}")
        return None

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    return log_path
