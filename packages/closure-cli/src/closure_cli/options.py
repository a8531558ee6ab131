"""Shared option handling for closure-cli commands."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from closure_core.settings import CompilerSettings


def build_settings(
    compiler_jar: str | None = None,
    java_binary: str | None = None,
    timeout: float | None = None,
) -> CompilerSettings:
    """Build CompilerSettings, letting explicit CLI options win over the environment.

    Args:
        compiler_jar: Value of --compiler-jar, if given.
        java_binary: Value of --java, if given.
        timeout: Value of --timeout, if given.

    Returns:
        Settings with environment values for anything not overridden.

    Raises:
        CLIError: If an option or CLOSURE_* variable is invalid.
    """
    from pydantic import ValidationError as PydanticValidationError

    from closure_cli.errors import handle_validation_error
    from closure_core.settings import CompilerSettings

    overrides: dict[str, Any] = {}
    if compiler_jar is not None:
        overrides["compiler_jar"] = Path(compiler_jar)
    if java_binary is not None:
        overrides["java_binary"] = java_binary
    if timeout is not None:
        overrides["timeout_seconds"] = timeout
    try:
        return CompilerSettings(**overrides)
    except PydanticValidationError as e:
        handle_validation_error(e)
