"""Immutable compiler configuration.

CompilerConfig holds the base directories, the ordered source files and
the target file for one compiler invocation. Every mutator validates its
input against the filesystem and returns a new instance, so a failed
update never leaves a half-applied configuration behind.

Base directories are applied only at the moment a file name is resolved.
Changing a base directory does not rewrite paths that are already stored.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from closure_core.errors import ConfigurationError
from closure_core.observability import get_logger

logger = get_logger(__name__)

DEFAULT_TARGET_FILE = "compiled.js"


def normalize_base_dir(path: str) -> str:
    """Return ``path`` with exactly one trailing separator.

    Args:
        path: Directory path, with or without trailing separators.

    Returns:
        The normalized path. An empty path stays empty.
    """
    if not path:
        return ""
    separators = os.sep + (os.altsep or "")
    return path.rstrip(separators) + os.sep


def _missing_path(path: str) -> ConfigurationError:
    return ConfigurationError(f"The path '{path}' does not seem to exist.", path=path)


class CompilerConfig(BaseModel):
    """Configuration for a single Closure Compiler invocation.

    Attributes:
        source_base_dir: Prefix applied when resolving source file names.
        target_base_dir: Prefix applied when resolving the target file name.
        source_files: Resolved source paths, unique, in insertion order.
        target_file: Resolved target path. Defaults to a bare "compiled.js".

    Example:
        >>> config = (
        ...     CompilerConfig()
        ...     .with_source_base_dir("assets/js-src")
        ...     .with_target_base_dir("assets/js")
        ...     .with_source_files(["functions.js", "library.js"])
        ...     .with_target_file("minified.js")
        ... )
        >>> config.source_files
        ('assets/js-src/functions.js', 'assets/js-src/library.js')
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    source_base_dir: str = Field(default="", description="Base directory for source files")
    target_base_dir: str = Field(default="", description="Base directory for the target file")
    source_files: tuple[str, ...] = Field(default=(), description="Resolved source file paths")
    target_file: str = Field(default=DEFAULT_TARGET_FILE, description="Resolved target file path")

    # Base directories

    def with_source_base_dir(self, path: str = "") -> CompilerConfig:
        """Return a copy with a new source base directory.

        Args:
            path: Existing directory, or an empty string to clear.

        Raises:
            ConfigurationError: If a non-empty path does not exist.
        """
        return self.model_copy(update={"source_base_dir": self._checked_base_dir(path)})

    def with_target_base_dir(self, path: str = "") -> CompilerConfig:
        """Return a copy with a new target base directory.

        Args:
            path: Existing directory, or an empty string to clear.

        Raises:
            ConfigurationError: If a non-empty path does not exist.
        """
        return self.model_copy(update={"target_base_dir": self._checked_base_dir(path)})

    @staticmethod
    def _checked_base_dir(path: str) -> str:
        if not path:
            return ""
        if not Path(path).exists():
            raise _missing_path(path)
        return normalize_base_dir(path)

    # Resolution

    def resolve_source(self, name: str) -> str:
        """Join the source base directory and ``name``."""
        return self.source_base_dir + name

    def resolve_target(self, name: str) -> str:
        """Join the target base directory and ``name``."""
        return self.target_base_dir + name

    # Source files

    def with_source_file(self, name: str) -> CompilerConfig:
        """Return a copy with one more source file.

        Adding a path that is already present returns the configuration
        unchanged.

        Args:
            name: File name, resolved against the source base directory.

        Raises:
            ConfigurationError: If the resolved path does not exist.
        """
        path = self.resolve_source(name)
        if path in self.source_files:
            return self
        if not Path(path).exists():
            raise _missing_path(path)
        logger.debug("source_file_added", path=path)
        return self.model_copy(update={"source_files": (*self.source_files, path)})

    def with_source_files(self, names: Iterable[str], reset: bool = True) -> CompilerConfig:
        """Return a copy with the given source files added in order.

        Args:
            names: File names, resolved against the source base directory.
            reset: Drop the existing source files first.

        Raises:
            ConfigurationError: If any resolved path does not exist. The
                receiver is left unchanged.
        """
        config = self.without_source_files() if reset else self
        for name in names:
            config = config.with_source_file(name)
        return config

    def without_source_file(self, name: str) -> CompilerConfig:
        """Return a copy without the first matching source file.

        Removing a file that is not present is a no-op.
        """
        path = self.resolve_source(name)
        if path not in self.source_files:
            return self
        files = list(self.source_files)
        files.remove(path)
        logger.debug("source_file_removed", path=path)
        return self.model_copy(update={"source_files": tuple(files)})

    def without_source_files(self) -> CompilerConfig:
        """Return a copy with no source files."""
        return self.model_copy(update={"source_files": ()})

    # Target file

    def with_target_file(self, name: str) -> CompilerConfig:
        """Return a copy writing to a new target file.

        The target file does not have to exist yet, but the directory it
        will be written to does.

        Args:
            name: File name, resolved against the target base directory.

        Raises:
            ConfigurationError: If the target's directory does not exist.
        """
        path = self.resolve_target(name)
        directory = os.path.dirname(path) or os.curdir
        if not Path(directory).is_dir():
            raise _missing_path(directory)
        return self.model_copy(update={"target_file": path})

    def check_target_not_source(self) -> None:
        """Refuse a target that would overwrite one of the sources.

        Both the stored target and the path it resolves to under the target
        base directory are checked.

        Raises:
            ConfigurationError: If the target file is one of the source files.
        """
        for target in (self.target_file, self.effective_target()):
            if target in self.source_files:
                raise ConfigurationError(
                    f"The target file '{target}' is one of the source files. "
                    "A compile would cause undesired effects.",
                    path=target,
                )

    def effective_target(self) -> str:
        """Return the target path the compiler will write to.

        A bare file name (the default "compiled.js", for instance) is placed
        in the target base directory when one is configured.
        """
        target = self.target_file
        if os.path.basename(target) == target and self.target_base_dir:
            return self.target_base_dir + target
        return target

    def with_effective_target(self) -> CompilerConfig:
        """Return a copy whose stored target is ``effective_target()``."""
        target = self.effective_target()
        if target == self.target_file:
            return self
        return self.model_copy(update={"target_file": target})

    def as_dict(self) -> dict[str, Any]:
        """Return the configuration in its legacy key layout."""
        return {
            "sourceBaseDir": self.source_base_dir,
            "targetBaseDir": self.target_base_dir,
            "sourceFileNames": list(self.source_files),
            "targetFileName": self.target_file,
        }
