# envforge:header:start
#
#   project      : EnvForge
#   file         : exit_codes.py
#   file_relpath : src/envforge/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Exit codes for the EnvForge CLI.

EnvForge aligns with the BSD `sysexits` convention where practical, so that other
tooling can interpret failures consistently. Usage errors keep Click's own exit
code (2).
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the EnvForge CLI.

    Attributes:
        SUCCESS: All documents were written.
        FAILURE: Generic failure (non-specific error).
        USAGE_ERROR: Missing argument or unknown option, as reported by Click.
        DATA_ERROR: A script failed to load, failed at runtime, or produced a value
            that cannot be converted. Mirrors BSD ``EX_DATAERR (65)``.
        IO_ERROR: A script could not be read or a document could not be written.
            Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: ``envforge.toml`` is malformed. Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 2  # click.UsageError.exit_code

    DATA_ERROR = 65  # EX_DATAERR
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
