"""CLI error handling for closure-cli.

Wraps closure-core exceptions into user-friendly messages with
appropriate exit codes.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from closure_cli.output import error, plain
from closure_core.errors import CompilationError, ConfigurationError
from closure_core.runner import EXIT_COMMAND_NOT_FOUND, EXIT_NOT_EXECUTABLE

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails

# Exit codes
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Bad configuration, missing source file
EXIT_SYSTEM_ERROR = 2  # Java runtime missing, compiler timed out


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        """Initialize CLIError.

        Args:
            message: User-facing error message.
            exit_code: Exit code for the CLI.
        """
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format a Pydantic validation error as one line per offending field.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - timeout_seconds: Input should be greater than 0"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        lines.append(f"  - {loc}: {e['msg']}")

    return "\n".join(lines)


def handle_validation_error(err: PydanticValidationError) -> NoReturn:
    """Turn invalid CLOSURE_* settings into a user error.

    Raises:
        CLIError: Always, with exit code 1.
    """
    formatted = format_pydantic_error(err)
    raise CLIError(
        f"Invalid settings (check the CLOSURE_* environment variables):\n{formatted}"
    ) from err


def handle_configuration_error(err: ConfigurationError) -> NoReturn:
    """Turn a configuration problem into a user error.

    Raises:
        CLIError: Always, with exit code 1.
    """
    raise CLIError(f"Invalid compiler configuration: {err.user_message}") from err


def handle_compilation_error(err: CompilationError) -> NoReturn:
    """Show compiler diagnostics and exit with the compiler's status.

    Statuses the compiler itself never produces (runtime not found, not
    executable, timed out) are reported as system errors.

    Note:
        This function never returns - it always calls sys.exit().
    """
    if err.output:
        plain(err.output.rstrip())
    exit_code = cli_exit_code(err.exit_code)
    if exit_code == EXIT_SYSTEM_ERROR and err.exit_code != EXIT_SYSTEM_ERROR:
        exit_with_error(
            f"{err.user_message}. Check the Java runtime with 'closure preflight'.",
            exit_code,
        )
    exit_with_error(err.user_message, exit_code)


def cli_exit_code(compiler_exit_code: int) -> int:
    """Map a compiler exit status to the CLI exit code."""
    # Negative statuses are timeouts and signals
    if compiler_exit_code < 0 or compiler_exit_code in (
        EXIT_NOT_EXECUTABLE,
        EXIT_COMMAND_NOT_FOUND,
    ):
        return EXIT_SYSTEM_ERROR
    return compiler_exit_code


def exit_with_error(message: str, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Exit the CLI with an error message.

    Note:
        This function never returns - it always calls sys.exit().
    """
    error(message)
    sys.exit(exit_code)
