"""Shared test fixtures for closure-cli tests.

Provides CliRunner fixtures, a JavaScript project in a temporary
directory, and stub "java" executables.
"""

from __future__ import annotations

import logging
import stat
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> Iterator[None]:
    """Configure structlog for tests and undo what the CLI group sets up."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,
    )
    root = logging.getLogger()
    level = root.level
    yield
    root.setLevel(level)


@pytest.fixture(autouse=True)
def isolate_closure_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep CLOSURE_* variables from the developer's shell out of tests."""
    for name in (
        "CLOSURE_INSTALL_ROOT",
        "CLOSURE_COMPILER_JAR",
        "CLOSURE_JAVA_BINARY",
        "CLOSURE_JAVA_OPTIONS",
        "CLOSURE_TIMEOUT_SECONDS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    """Create ``src/a.js``, ``src/b.js`` and an empty ``dist/`` under tmp_path."""
    src = tmp_path / "src"
    src.mkdir()
    (src / "a.js").write_text("var a = 1;\n")
    (src / "b.js").write_text("var b = 2;\n")
    (tmp_path / "dist").mkdir()
    return tmp_path


@pytest.fixture
def compiler_jar(tmp_path: Path) -> Path:
    """Create an empty file standing in for compiler.jar."""
    jar = tmp_path / "compiler.jar"
    jar.write_bytes(b"")
    return jar


@pytest.fixture
def make_stub_java(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture writing an executable shell script that stands in for java.

    The script prints ``message`` to stderr and exits with ``exit_code``.
    """

    def _create(exit_code: int = 0, message: str = "") -> Path:
        script = tmp_path / f"stub-java-{exit_code}"
        lines = ["#!/bin/sh"]
        if message:
            lines.append(f"echo '{message}' >&2")
        lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _create
