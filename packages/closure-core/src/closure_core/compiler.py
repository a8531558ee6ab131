"""ClosureCompiler: run Google Closure Compiler over a set of JavaScript files.

Usage: set base directories for your files, set names for the source files
and the resulting target file, and compile.

    >>> compiler = ClosureCompiler()
    >>> compiler.set_source_base_dir("path/to/javascript-src/")
    >>> compiler.set_target_base_dir("path/to/javascript/")
    >>> compiler.set_source_files(["one.js", "two.js", "three.js"])
    >>> compiler.set_target_file("minified.js")
    >>> compiler.compile()
    0

All JavaScript processing happens in the external compiler jar. This
module only validates paths, builds the command line and reports the
outcome of the child process.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from closure_core.command import build_command
from closure_core.config import CompilerConfig
from closure_core.errors import CompilationError
from closure_core.observability import get_logger
from closure_core.runner import ProcessRunner, SubprocessRunner
from closure_core.settings import CompilerSettings

logger = get_logger(__name__)


class CompileResult(BaseModel):
    """Outcome of one compiler run.

    Attributes:
        exit_code: Compiler exit status (0 means success).
        output: Captured compiler diagnostics.
        command: The argv that was executed.
        target_file: Path the compiler was asked to write.
        duration_ms: Wall-clock run time in milliseconds.
        timed_out: Whether the run hit the configured timeout.
    """

    model_config = ConfigDict(frozen=True)

    exit_code: int
    output: str = ""
    command: tuple[str, ...] = Field(default=())
    target_file: str
    duration_ms: int = Field(default=0, ge=0)
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        """True when the compiler exited with status 0."""
        return self.exit_code == 0

    def raise_for_status(self) -> None:
        """Raise CompilationError if the compiler did not succeed.

        Raises:
            CompilationError: With the exit status and captured output.
        """
        if self.succeeded:
            return
        if self.timed_out:
            message = "Closure Compiler timed out"
        else:
            message = f"Closure Compiler exited with status {self.exit_code}"
        raise CompilationError(message, exit_code=self.exit_code, output=self.output)


class ClosureCompiler:
    """Configure and invoke the Closure Compiler.

    Wraps an immutable CompilerConfig. Setters validate eagerly and swap the
    held configuration only when validation succeeds.

    Attributes:
        settings: Location of the compiler jar and the Java runtime.
        runner: Process runner used to execute the compiler.
        last_result: Result of the most recent run, if any.

    Example:
        >>> compiler = ClosureCompiler(
        ...     settings=CompilerSettings(compiler_jar="/opt/closure/compiler.jar"),
        ... )
        >>> compiler.add_source_file("app.js")
        >>> result = compiler.run()
        >>> result.succeeded
        True
    """

    def __init__(
        self,
        settings: CompilerSettings | None = None,
        runner: ProcessRunner | None = None,
        config: CompilerConfig | None = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            settings: Compiler settings. Loaded from the environment if omitted.
            runner: Process runner. Defaults to SubprocessRunner.
            config: Starting configuration. Defaults to an empty one.
        """
        self.settings = settings if settings is not None else CompilerSettings()
        self.runner: ProcessRunner = runner if runner is not None else SubprocessRunner()
        self._config = config if config is not None else CompilerConfig()
        self._compiler_jar = self.settings.resolve_compiler_jar()
        self.last_result: CompileResult | None = None
        self._log = logger.bind(component="closure_compiler")

    @property
    def compiler_jar(self) -> Path:
        """Absolute path of the compiler jar, fixed at construction."""
        return self._compiler_jar

    @property
    def config(self) -> CompilerConfig:
        """The current configuration value."""
        return self._config

    def get_binary(self) -> list[str]:
        """Return the command prefix that launches the compiler."""
        return self.settings.binary(self._compiler_jar)

    def get_config(self) -> dict[str, Any]:
        """Return the current configuration as a plain dictionary."""
        return self._config.as_dict()

    def set_source_base_dir(self, path: str = "") -> None:
        """Set or clear the base directory for source files.

        Raises:
            ConfigurationError: If a non-empty path does not exist.
        """
        self._config = self._config.with_source_base_dir(path)

    def set_target_base_dir(self, path: str = "") -> None:
        """Set or clear the base directory for the target file.

        Raises:
            ConfigurationError: If a non-empty path does not exist.
        """
        self._config = self._config.with_target_base_dir(path)

    def clear_source_files(self) -> None:
        self._config = self._config.without_source_files()

    def add_source_file(self, name: str) -> None:
        """Add a source file; adding the same file twice is a no-op.

        Raises:
            ConfigurationError: If the resolved path does not exist.
        """
        self._config = self._config.with_source_file(name)

    def set_source_files(self, names: Iterable[str], reset: bool = True) -> None:
        """Add several source files in order.

        Either every file is added or, on the first missing file, none is.

        Args:
            names: File names, resolved against the source base directory.
            reset: Drop previously added source files first.

        Raises:
            ConfigurationError: If any resolved path does not exist.
        """
        self._config = self._config.with_source_files(names, reset=reset)

    def remove_source_file(self, name: str) -> None:
        self._config = self._config.without_source_file(name)

    def set_target_file(self, name: str) -> None:
        """Set the file the compiler writes to.

        Raises:
            ConfigurationError: If the target's directory does not exist.
        """
        self._config = self._config.with_target_file(name)

    def build_command(self) -> list[str]:
        """Validate the configuration and return the argv to execute.

        Raises:
            ConfigurationError: If the target file is one of the sources.
        """
        self._config.check_target_not_source()
        return build_command(
            self.get_binary(),
            self._config.source_files,
            self._config.effective_target(),
        )

    def run(self) -> CompileResult:
        """Run the compiler and return the full result.

        Returns:
            CompileResult with exit status and captured output.

        Raises:
            ConfigurationError: If the target file is one of the sources.
        """
        command = self.build_command()
        # Store the path the compiler writes to
        self._config = self._config.with_effective_target()
        target = self._config.target_file

        self._log.info(
            "compile_started",
            source_count=len(self._config.source_files),
            target_file=target,
        )

        process = self.runner.run(command, timeout=self.settings.timeout_seconds)
        result = CompileResult(
            exit_code=process.exit_code,
            output=process.output,
            command=tuple(command),
            target_file=target,
            duration_ms=process.duration_ms,
            timed_out=process.timed_out,
        )
        self.last_result = result

        if result.succeeded:
            self._log.info(
                "compile_completed",
                target_file=target,
                duration_ms=result.duration_ms,
            )
        else:
            self._log.warning(
                "compile_failed",
                exit_code=result.exit_code,
                timed_out=result.timed_out,
                output=result.output,
            )
        return result

    def compile(self) -> int:
        """Run the compiler and return its exit status.

        The captured output of the run is available as ``last_result``.

        Raises:
            ConfigurationError: If the target file is one of the sources.
        """
        return self.run().exit_code
