"""Runtime settings for locating and launching the Closure Compiler.

The compiler is an external Java archive. Its location and the Java
runtime used to launch it are read from constructor arguments or from
environment variables with the ``CLOSURE_`` prefix.

Example:
    >>> settings = CompilerSettings(install_root="/opt/closure")
    >>> settings.resolve_compiler_jar()
    PosixPath('/opt/closure/compiler-latest/compiler.jar')
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Jar location relative to the installation root
DEFAULT_COMPILER_JAR = Path("compiler-latest") / "compiler.jar"


class CompilerSettings(BaseSettings):
    """Settings for the external compiler artifact and its runtime.

    Can be loaded from environment variables with CLOSURE_ prefix.

    Example:
        >>> # From environment (CLOSURE_COMPILER_JAR, CLOSURE_JAVA_BINARY, ...)
        >>> settings = CompilerSettings()
        >>>
        >>> # Explicit
        >>> settings = CompilerSettings(
        ...     compiler_jar="/usr/share/java/closure-compiler.jar",
        ...     timeout_seconds=120,
        ... )
    """

    model_config = SettingsConfigDict(
        env_prefix="CLOSURE_",
        env_file=".env",
        extra="ignore",
    )

    install_root: Path = Field(
        default_factory=Path.cwd,
        description="Installation root the default jar location is relative to",
    )
    compiler_jar: Path | None = Field(
        default=None,
        description="Explicit path to compiler.jar (overrides install_root)",
    )
    java_binary: str = Field(
        default="java",
        description="Java runtime executable",
    )
    java_options: list[str] = Field(
        default_factory=list,
        description="Extra JVM options placed before -jar",
    )
    timeout_seconds: float | None = Field(
        default=None,
        gt=0,
        description="Maximum compiler run time in seconds (None waits forever)",
    )

    def resolve_compiler_jar(self) -> Path:
        """Return the absolute path of the compiler jar.

        The file is not required to exist; a missing jar surfaces as a
        compiler failure when the command is run.

        Returns:
            Absolute path to compiler.jar.
        """
        jar = self.compiler_jar
        if jar is None:
            jar = self.install_root / DEFAULT_COMPILER_JAR
        return jar.expanduser().resolve()

    def binary(self, compiler_jar: Path | None = None) -> list[str]:
        """Return the command prefix used to launch the compiler.

        Args:
            compiler_jar: Jar path to use. Resolved from settings if omitted.

        Returns:
            Argument list such as ``["java", "-jar", "/opt/.../compiler.jar"]``.
        """
        jar = compiler_jar if compiler_jar is not None else self.resolve_compiler_jar()
        return [self.java_binary, *self.java_options, "-jar", str(jar)]
