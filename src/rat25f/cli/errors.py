"""
CLI Exit Codes
==============

Provides consistent exit codes for the command-line tools.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    PARSE_ERROR = 1      # At least one input failed (syntax error or unreadable file)
    INVALID_ARGS = 2     # Invalid arguments (click's usage error code)
    INTERNAL_ERROR = 3   # Unexpected internal error while processing an input
