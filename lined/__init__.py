"""lined - invocation front end of a line-oriented text editor."""

from .access import AccessDecision, check_access, may_access_filename
from .bootstrap import InitialLoad, Startup, run
from .modes import ModeRegistry, Modes

__all__ = [
    'AccessDecision',
    'check_access',
    'may_access_filename',
    'InitialLoad',
    'Startup',
    'run',
    'ModeRegistry',
    'Modes',
]
