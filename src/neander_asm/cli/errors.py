"""
ndrasm exit codes and error reporting.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from neander_asm.errors import AssemblerError, NeanderError


class ExitCode(IntEnum):
    SUCCESS = 0
    BUILD_ERROR = 1      # assembly or image problem
    INVALID_ARGS = 2     # bad option, unreadable input
    INTERNAL_ERROR = 3


def _describe(error: Exception, error_type: str | None) -> tuple[str, ExitCode]:
    if isinstance(error, AssemblerError):
        # str(error) already carries "file:line:col: error:"
        header = f"{error_type} failed:\n" if error_type else ""
        return f"{header}{error}", ExitCode.BUILD_ERROR

    if isinstance(error, NeanderError):
        label = f"{error_type} error" if error_type else "Error"
        return f"{label}: {error}", ExitCode.BUILD_ERROR

    if isinstance(error, (click.BadParameter, FileNotFoundError, PermissionError)):
        return f"Error: {error}", ExitCode.INVALID_ARGS

    return f"Internal error: {error}", ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Print an error to stderr and exit with its exit code.

    With verbose set, unexpected exceptions also print a traceback.
    """
    message, code = _describe(error, error_type)
    click.echo(message, err=True)
    if code == ExitCode.INTERNAL_ERROR and verbose:
        traceback.print_exc()
    sys.exit(code)
