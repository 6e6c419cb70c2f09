"""
CLI Error Handling
==================

Maps exceptions to messages on stderr and process exit codes.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes of the gbobjdump command."""
    SUCCESS = 0
    DECODE_ERROR = 1     # Listing hit malformed input, or the ROM layout is wrong
    INVALID_ARGS = 2     # Bad option values, unreadable or empty input
    INTERNAL_ERROR = 3   # Unexpected internal error


# Exceptions caused by what the user asked for rather than by the ROM
_USAGE_ERRORS = (click.BadParameter, FileNotFoundError, PermissionError, IsADirectoryError)


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception and exit.

    Package errors exit with DECODE_ERROR, usage problems with INVALID_ARGS,
    and anything else with INTERNAL_ERROR (plus a traceback in verbose mode).

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for package errors (e.g., "ROM")

    Raises:
        SystemExit: Always
    """
    from gbobjdump.errors import GBObjdumpError

    if isinstance(error, GBObjdumpError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.DECODE_ERROR)

    if isinstance(error, _USAGE_ERRORS):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    click.echo(f"Internal error: {error}", err=True)
    if verbose:
        traceback.print_exc()
    sys.exit(ExitCode.INTERNAL_ERROR)
