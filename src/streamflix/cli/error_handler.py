"""
CLI Error Handling Utilities

Maps exceptions raised while running a command to an exit code and prints
them either as a short message on stderr or as a JSON envelope on stdout.
"""

from __future__ import annotations

import logging

import typer

from streamflix.shared.constants import CLIDefaults
from streamflix.shared.errors import (
    ApplicationError,
    ErrorCode,
    InfrastructureError,
    SecurityError,
    StreamFlixError,
)

from .json_formatter import format_json_output

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def _describe(error: BaseException) -> tuple[str, str]:
    """Return ``(error_code, message)`` for display."""
    if isinstance(error, SecurityError):
        return error.code.value, f"Configuration error: {error.message}"
    if isinstance(error, ApplicationError):
        return error.code.value, f"Application error: {error.message}"
    if isinstance(error, InfrastructureError):
        return error.code.value, f"Infrastructure error: {error.message}"
    if isinstance(error, StreamFlixError):
        return error.code.value, error.message
    if isinstance(error, KeyboardInterrupt):
        return ErrorCode.CLI_UNEXPECTED_ERROR.value, "Command interrupted by user"
    return ErrorCode.CLI_UNEXPECTED_ERROR.value, f"Unexpected error: {error}"


def handle_cli_error(
    error: BaseException,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Report a command failure and return the exit code to use.

    Args:
        error: The exception that occurred
        command: The CLI command being executed
        json_output: Whether to output JSON format

    Returns:
        Exit code for the CLI command
    """
    error_code, message = _describe(error)
    exit_code = EXIT_INTERRUPTED if isinstance(error, KeyboardInterrupt) else CLIDefaults.EXIT_ERROR

    if isinstance(error, (StreamFlixError, KeyboardInterrupt)):
        logger.error(
            "CLI error in %s: %s",
            command,
            message,
            extra={"context": {"command": command, "error_code": error_code}},
        )
    else:
        logger.exception("CLI error in %s: %s", command, message)

    if json_output:
        output = format_json_output(
            success=False,
            command=command,
            errors=[message],
            data={
                "error_code": error_code,
                "error_type": type(error).__name__,
                "exit_code": exit_code,
            },
        )
        typer.echo(output.decode("utf-8"))
    else:
        typer.echo(f"Error: {message}", err=True)

    return exit_code
