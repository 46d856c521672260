"""Command line classification.

Wraps ``argparse`` so that the recognized options come back as an ordered
list of ``ParsedOption`` values, in the order they appeared on the command
line, with the positional arguments kept separately.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from enum import Enum
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .constants import EditorConstants, Messages
from .errors import StartupError, UsageError


class OptionCode(Enum):
    EXTENDED_REGEXP = 'E'
    TRADITIONAL = 'G'
    HELP = 'h'
    LOOSE_EXIT_STATUS = 'l'
    PROMPT = 'p'
    RESTRICTED = 'r'
    SCRIPTED = 's'
    VERBOSE = 'v'
    VERSION = 'V'
    STRIP_TRAILING_CR = 'strip-trailing-cr'


class OptionSpec(NamedTuple):
    code: OptionCode
    short: Optional[str]
    longs: Tuple[str, ...]
    takes_value: bool = False


OPTIONS: Tuple[OptionSpec, ...] = (
    OptionSpec(OptionCode.EXTENDED_REGEXP, 'E', ('extended-regexp',)),
    OptionSpec(OptionCode.TRADITIONAL, 'G', ('traditional',)),
    OptionSpec(OptionCode.HELP, 'h', ('help',)),
    OptionSpec(OptionCode.LOOSE_EXIT_STATUS, 'l', ('loose-exit-status',)),
    OptionSpec(OptionCode.PROMPT, 'p', ('prompt',), takes_value=True),
    OptionSpec(OptionCode.RESTRICTED, 'r', ('restricted',)),
    OptionSpec(OptionCode.SCRIPTED, 's', ('quiet', 'silent')),
    OptionSpec(OptionCode.VERBOSE, 'v', ('verbose',)),
    OptionSpec(OptionCode.VERSION, 'V', ('version',)),
    OptionSpec(OptionCode.STRIP_TRAILING_CR, None, ('strip-trailing-cr',)),
)


@dataclass(frozen=True)
class ParsedOption:
    """A recognized option, with its value if it takes one."""

    code: OptionCode
    value: Optional[str] = None


@dataclass
class ClassifiedArgs:
    options: List[ParsedOption] = field(default_factory=list)
    arguments: List[str] = field(default_factory=list)


class _RecordOption(argparse.Action):
    """Appends the option to ``namespace.options`` as it is seen."""

    def __init__(self, option_strings, dest, code=None, **kwargs):
        super().__init__(option_strings, dest, **kwargs)
        self.code = code

    def __call__(self, parser, namespace, values, option_string=None):
        value = values if isinstance(values, str) else None
        namespace.options.append(ParsedOption(self.code, value))


class _OptionParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing and exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser(table: Sequence[OptionSpec] = OPTIONS) -> argparse.ArgumentParser:
    """Install the option table into a fresh parser."""
    try:
        parser = _OptionParser(
            prog=EditorConstants.PROGRAM_NAME,
            add_help=False,
        )
        for spec in table:
            flags = [f"-{spec.short}"] if spec.short else []
            flags.extend(f"--{name}" for name in spec.longs)
            parser.add_argument(
                *flags,
                action=_RecordOption,
                code=spec.code,
                nargs=None if spec.takes_value else 0,
                dest=argparse.SUPPRESS,
                default=argparse.SUPPRESS,
                metavar="STRING" if spec.takes_value else None,
            )
        parser.add_argument("arguments", nargs="*")
    except MemoryError as e:
        raise StartupError(Messages.MEMORY_EXHAUSTED) from e
    return parser


def classify(argv: Sequence[str],
             parser: Optional[argparse.ArgumentParser] = None) -> ClassifiedArgs:
    """Split ``argv`` (without the program name) into options and arguments.

    Raises:
        UsageError: An option is unrecognized or lacks its value.
    """
    if parser is None:
        parser = build_parser()
    namespace = argparse.Namespace(options=[])
    namespace = parser.parse_intermixed_args(list(argv), namespace)
    return ClassifiedArgs(options=namespace.options,
                          arguments=list(namespace.arguments))


def help_text(invocation_name: str = EditorConstants.PROGRAM_NAME) -> str:
    """Text printed by ``--help``."""
    return (
        f"{EditorConstants.PROGRAM_NAME} is a line-oriented text editor. It is used to create, display,\n"
        "modify and otherwise manipulate text files, both interactively and via\n"
        "shell scripts. In restricted mode it can only edit files in the current\n"
        "directory and cannot execute shell commands.\n"
        f"\nUsage: {invocation_name} [options] [file]\n"
        "\nOptions:\n"
        "  -h, --help                 display this help and exit\n"
        "  -V, --version              output version information and exit\n"
        "  -E, --extended-regexp      use extended regular expressions\n"
        "  -G, --traditional          run in compatibility mode\n"
        "  -l, --loose-exit-status    exit with 0 status even if a command fails\n"
        "  -p, --prompt=STRING        use STRING as an interactive prompt\n"
        "  -r, --restricted           run in restricted mode\n"
        "  -s, --quiet, --silent      suppress diagnostics, byte counts and '!' prompt\n"
        "  -v, --verbose              be verbose; equivalent to the 'H' command\n"
        "      --strip-trailing-cr    strip carriage returns at end of text lines\n"
        "\nStart edit by reading in 'file' if given.\n"
        "If 'file' begins with a '!', read output of shell command.\n"
        "\nExit status: 0 for a normal exit, 1 for environmental problems (file\n"
        "not found, invalid flags, I/O errors, etc), 2 to indicate a corrupt or\n"
        "invalid input file, 3 for an internal consistency error (e.g., bug) which\n"
        "caused the editor to panic.\n"
    )
