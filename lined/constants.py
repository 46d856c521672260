"""Constants and configuration for the lined front end."""


class ExitStatus:
    """Process exit codes."""

    OK = 0  # Normal exit
    ENVIRONMENT = 1  # Bad option, missing file, I/O error
    CORRUPT_INPUT = 2  # Corrupt or invalid input file at startup
    INTERNAL = 3  # Internal consistency error (bug)


class EditorConstants:
    """Central configuration constants for the editor."""

    PROGRAM_NAME = "lined"
    PROGRAM_YEAR = "2022"

    # Positional argument meaning "commands come from a pipe or script"
    STDIN_ARGUMENT = "-"
    # Leading character of a shell command source
    SHELL_PREFIX = "!"
    PARENT_DIRECTORY = ".."

    # Conventional error marker printed on stdout
    ERROR_MARKER = "?"
    DEFAULT_PROMPT = "*"
    SHELL_DONE_MARKER = "!"

    # Environment variables
    DEBUG_ENV = "LINED_DEBUG"
    LOG_FILE_ENV = "LINED_LOG_FILE"
    LOG_FILE_NAME = "lined.log"


class Messages:
    """Error messages stored in the last-error slot."""

    SHELL_RESTRICTED = "Shell access restricted"
    DIRECTORY_RESTRICTED = "Directory access restricted"
    CANNOT_OPEN = "Cannot open input file"
    CANNOT_READ = "Cannot read input file"
    CANNOT_WRITE = "Cannot open output file"
    INVALID_FILENAME = "Invalid filename"
    INVALID_PROMPT = "Invalid prompt"
    NO_FILENAME = "No current filename"
    UNKNOWN_COMMAND = "Unknown command"
    UNEXPECTED_SUFFIX = "Invalid command suffix"
    MEMORY_EXHAUSTED = "Memory exhausted."
    UNCAUGHT_OPTION = "internal error: uncaught option."
