"""
CLI Error Handling
==================

Maps exceptions raised while running ``vmasm`` to a console message and a
process exit code.

    0   success
    1   the source failed to assemble
    2   bad command-line arguments or unusable files
    3   anything else (a bug in the assembler)
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from vm8asm.errors import Vm8Error


class ExitCode(IntEnum):
    """Process exit codes for vmasm."""
    SUCCESS = 0
    BUILD_ERROR = 1
    INVALID_ARGS = 2
    INTERNAL_ERROR = 3


# Checked in order; the first matching type wins.
_USAGE_ERRORS = (
    click.BadParameter,
    FileNotFoundError,
    UnicodeDecodeError,
    IsADirectoryError,
    PermissionError,
)


def exit_code_for(error: BaseException) -> ExitCode:
    """Classify an exception into an exit code."""
    if isinstance(error, Vm8Error):
        return ExitCode.BUILD_ERROR
    if isinstance(error, _USAGE_ERRORS):
        return ExitCode.INVALID_ARGS
    return ExitCode.INTERNAL_ERROR


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception on stderr and exit.

    Args:
        error: The exception that was raised
        verbose: Print a traceback for internal errors
        error_type: Label for assembly errors, e.g. "Assembly" gives
                    "Assembly error: ..."

    Raises:
        SystemExit: Always
    """
    code = exit_code_for(error)

    if code == ExitCode.BUILD_ERROR:
        label = f"{error_type} error" if error_type else "Error"
        click.echo(f"{label}: {error}", err=True)
    elif code == ExitCode.INVALID_ARGS:
        click.echo(f"Error: {error}", err=True)
    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()

    sys.exit(code)
