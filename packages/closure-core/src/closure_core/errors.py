"""Exception hierarchy for closure-core.

This module defines the exception classes used throughout closure-runtime:
- ClosureError: Base exception for all closure-related errors
- ConfigurationError: Raised when a path or setting is invalid
- CompilationError: Raised when the external compiler reports failure

User-facing messages are safe to display. Technical details are logged
internally via structlog and never appended to the message.
"""

from __future__ import annotations

from closure_core.observability import get_logger

logger = get_logger(__name__)


class ClosureError(Exception):
    """Base exception for closure-runtime.

    Args:
        user_message: Message to display to the user.
        internal_details: Optional technical details for logging only.

    Example:
        >>> raise ClosureError(
        ...     "Compiler configuration invalid",
        ...     internal_details="CLOSURE_COMPILER_JAR points to a directory",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ClosureError with user message and optional internal details.

        Args:
            user_message: Message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "closure_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(ClosureError):
    """Raised when compiler configuration is invalid.

    Use this exception when:
    - A base directory does not exist
    - A source file does not exist
    - The directory of a target file does not exist
    - The target file is also one of the source files

    Attributes:
        path: The offending filesystem path (if known).

    Example:
        >>> raise ConfigurationError(
        ...     "The path 'src/missing.js' does not seem to exist.",
        ...     path="src/missing.js",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ConfigurationError with path context.

        Args:
            user_message: Message to display to the user.
            path: Offending filesystem path (optional).
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message, internal_details=internal_details)
        self.path = path


class CompilationError(ClosureError):
    """Raised when the external compiler exits with a non-zero status.

    The compiler itself only reports an exit status; this exception is
    raised on request (see ``CompileResult.raise_for_status``) and keeps the
    captured compiler output for display.

    Attributes:
        exit_code: Exit status reported by the compiler process.
        output: Captured compiler diagnostics.

    Example:
        >>> raise CompilationError(
        ...     "Closure Compiler exited with status 2",
        ...     exit_code=2,
        ...     output="app.js:3: ERROR - Parse error. missing ; before statement",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        exit_code: int,
        output: str = "",
        internal_details: str | None = None,
    ) -> None:
        """Initialize CompilationError.

        Args:
            user_message: Message to display to the user.
            exit_code: Exit status of the compiler process.
            output: Captured compiler output.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message, internal_details=internal_details)
        self.exit_code = exit_code
        self.output = output
