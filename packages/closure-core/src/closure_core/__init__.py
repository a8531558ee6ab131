"""closure-core: Configure and invoke Google Closure Compiler.

This package provides:
- CompilerConfig: Immutable, validated compiler configuration
- ClosureCompiler: Facade that builds the command line and runs the jar
- ProcessRunner: Injectable process execution boundary
- CompilerSettings: Jar location and Java runtime settings
"""

from __future__ import annotations

__version__ = "0.1.0"

from closure_core.command import build_arguments, build_command, format_command
from closure_core.compiler import ClosureCompiler, CompileResult
from closure_core.config import DEFAULT_TARGET_FILE, CompilerConfig
from closure_core.errors import ClosureError, CompilationError, ConfigurationError
from closure_core.observability import configure_logging, get_logger
from closure_core.runner import ProcessResult, ProcessRunner, SubprocessRunner
from closure_core.settings import DEFAULT_COMPILER_JAR, CompilerSettings

__all__ = [
    "__version__",
    # Compiler
    "ClosureCompiler",
    "CompileResult",
    # Configuration
    "CompilerConfig",
    "CompilerSettings",
    "DEFAULT_COMPILER_JAR",
    "DEFAULT_TARGET_FILE",
    # Command line
    "build_arguments",
    "build_command",
    "format_command",
    # Process execution
    "ProcessRunner",
    "ProcessResult",
    "SubprocessRunner",
    # Errors
    "ClosureError",
    "ConfigurationError",
    "CompilationError",
    # Logging
    "configure_logging",
    "get_logger",
]
