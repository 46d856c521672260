"""Restricted-mode file access checks.

These checks are purely syntactic: they look at the name only and never
touch the filesystem, so a denied name is never opened.
"""

from __future__ import annotations

import logging
import os
from typing import NamedTuple, Optional

from .constants import EditorConstants, Messages
from .errors import ErrorSlot

logger = logging.getLogger(__name__)


class AccessDecision(NamedTuple):
    allowed: bool
    reason: Optional[str] = None


def check_access(name: str, restricted: bool) -> AccessDecision:
    """Decide whether the editor may read or write ``name``.

    Args:
        name: Filename, or a shell command prefixed with '!'.
        restricted: Whether restricted mode is active.

    Returns:
        AccessDecision with the denial reason when access is refused.
    """
    if not restricted:
        return AccessDecision(True)
    if name.startswith(EditorConstants.SHELL_PREFIX):
        return AccessDecision(False, Messages.SHELL_RESTRICTED)
    if name == EditorConstants.PARENT_DIRECTORY or os.sep in name or "/" in name:
        return AccessDecision(False, Messages.DIRECTORY_RESTRICTED)
    return AccessDecision(True)


def may_access_filename(name: str, restricted: bool,
                        errors: Optional[ErrorSlot] = None) -> bool:
    """Return True if ``name`` may be accessed; record the reason if not."""
    decision = check_access(name, restricted)
    if not decision.allowed:
        logger.debug("access to %r denied: %s", name, decision.reason)
        if errors is not None:
            errors.set(decision.reason)
    return decision.allowed
