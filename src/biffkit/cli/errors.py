"""
Unified CLI Error Handling
==========================

Provides consistent error handling and exit codes for the biffkit CLI.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from biffkit.errors import BiffError


class ExitCode(IntEnum):
    """Standard exit codes for CLI tools."""
    SUCCESS = 0
    RECORD_ERROR = 1     # Malformed stream, round-trip mismatch
    INVALID_ARGS = 2     # Invalid arguments or missing files
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception and exit with the matching exit code.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always
    """
    if isinstance(error, BiffError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.RECORD_ERROR)

    elif isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
