"""Shared pytest fixtures for closure-core tests.

Provides a JavaScript source tree in a temporary directory, a fake
process runner that records commands instead of launching them, and a
factory for stub "java" executables used by end-to-end tests.
"""

from __future__ import annotations

import stat
import sys
from collections.abc import Callable, Sequence
from pathlib import Path

import pytest
import structlog

from closure_core.runner import ProcessResult


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    Without this, structlog may use different processors depending on
    test execution order.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


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


class FakeRunner:
    """ProcessRunner double that records every argv it is asked to run."""

    def __init__(self, exit_code: int = 0, stdout: str = "", stderr: str = "") -> None:
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        self.calls: list[list[str]] = []
        self.timeouts: list[float | None] = []

    def run(self, argv: Sequence[str], *, timeout: float | None = None) -> ProcessResult:
        self.calls.append(list(argv))
        self.timeouts.append(timeout)
        return ProcessResult(
            exit_code=self.exit_code,
            stdout=self.stdout,
            stderr=self.stderr,
            duration_ms=5,
        )

    @property
    def last_argv(self) -> list[str]:
        return self.calls[-1]


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Return a runner that succeeds without launching anything."""
    return FakeRunner()


@pytest.fixture
def make_fake_runner() -> Callable[..., FakeRunner]:
    """Factory fixture for runners with a chosen exit code and output."""
    return FakeRunner


@pytest.fixture
def js_project(tmp_path: Path) -> Path:
    """Create a small JavaScript project.

    Layout::

        <tmp>/src/a.js, b.js, c.js
        <tmp>/src/lib/util.js
        <tmp>/dist/

    Returns:
        The project root.
    """
    src = tmp_path / "src"
    (src / "lib").mkdir(parents=True)
    for name in ("a.js", "b.js", "c.js"):
        (src / name).write_text(f"var {name[0]} = 1;\n")
    (src / "lib" / "util.js").write_text("function util() {}\n")
    (tmp_path / "dist").mkdir()
    return tmp_path


@pytest.fixture
def make_stub_java(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture writing an executable shell script that stands in for java.

    The script records its arguments one per line in ``<script>.args``,
    writes ``message`` to stderr, optionally sleeps, and exits with
    ``exit_code``.
    """

    def _create(exit_code: int = 0, message: str = "", sleep: float = 0) -> Path:
        script = tmp_path / f"stub-java-{exit_code}"
        args_file = script.with_suffix(".args")
        lines = [
            "#!/bin/sh",
            f"printf '%s\\n' \"$@\" > '{args_file}'",
        ]
        if message:
            lines.append(f"echo '{message}' >&2")
        if sleep:
            lines.append(f"sleep {sleep}")
        lines.append(f"exit {exit_code}")
        script.write_text("\n".join(lines) + "\n")
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return _create
