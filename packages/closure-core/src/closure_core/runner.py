"""Process execution boundary.

The compiler facade never calls ``subprocess`` directly. It talks to a
ProcessRunner, so tests can substitute a fake runner and callers can wrap
execution (remote hosts, containers) without touching compiler logic.
"""

from __future__ import annotations

import subprocess
import time
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field

from closure_core.observability import get_logger

logger = get_logger(__name__)

# Exit statuses a POSIX shell reports for commands it cannot start
EXIT_NOT_EXECUTABLE = 126
EXIT_COMMAND_NOT_FOUND = 127
EXIT_TIMED_OUT = -1


class ProcessResult(BaseModel):
    """Outcome of one external process run.

    Attributes:
        exit_code: Process exit status (126/127 if it could not start, -1 on timeout).
        stdout: Captured standard output (includes stderr when merged).
        stderr: Captured standard error, or runner diagnostics.
        duration_ms: Wall-clock run time in milliseconds.
        timed_out: Whether the run was stopped by the timeout.
    """

    model_config = ConfigDict(frozen=True)

    exit_code: int
    stdout: str = ""
    stderr: str = ""
    duration_ms: int = Field(default=0, ge=0)
    timed_out: bool = False

    @property
    def output(self) -> str:
        """Combined output, stdout first."""
        return "".join(part for part in (self.stdout, self.stderr) if part)


@runtime_checkable
class ProcessRunner(Protocol):
    """Anything that can run an argv and report how it went."""

    def run(self, argv: Sequence[str], *, timeout: float | None = None) -> ProcessResult:
        """Run ``argv`` to completion.

        Args:
            argv: Command and arguments. No shell is involved.
            timeout: Seconds to wait before giving up (None waits forever).

        Returns:
            ProcessResult describing the run.
        """
        ...


class SubprocessRunner:
    """ProcessRunner backed by ``subprocess.run``.

    Runs synchronously and blocks until the child exits. Output is captured
    as text; with ``merge_stderr`` (the default) stderr is folded into
    stdout, matching the ``2>&1`` the compiler has always been run with.

    Example:
        >>> runner = SubprocessRunner()
        >>> result = runner.run(["java", "-version"])
        >>> result.exit_code
        0
    """

    def __init__(
        self,
        *,
        merge_stderr: bool = True,
        cwd: Path | str | None = None,
        env: Mapping[str, str] | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            merge_stderr: Fold stderr into stdout.
            cwd: Working directory for the child process.
            env: Environment for the child process (inherits when None).
        """
        self.merge_stderr = merge_stderr
        self.cwd = cwd
        self.env = dict(env) if env is not None else None
        self._log = logger.bind(component="subprocess_runner")

    def run(self, argv: Sequence[str], *, timeout: float | None = None) -> ProcessResult:
        """Run ``argv`` and capture its output.

        An unrunnable executable and a timeout are reported through the result
        rather than raised, so callers always get an exit status back.
        """
        command = list(argv)
        start_time = time.monotonic()
        self._log.debug("process_started", executable=command[0], arg_count=len(command) - 1)

        try:
            completed = subprocess.run(
                command,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT if self.merge_stderr else subprocess.PIPE,
                text=True,
                timeout=timeout,
                cwd=self.cwd,
                env=self.env,
                check=False,
            )
        except FileNotFoundError as e:
            self._log.error("process_not_found", executable=command[0], error=str(e))
            return ProcessResult(
                exit_code=EXIT_COMMAND_NOT_FOUND,
                stderr=f"{command[0]}: command not found",
                duration_ms=_elapsed_ms(start_time),
            )
        except PermissionError as e:
            self._log.error("process_not_executable", executable=command[0], error=str(e))
            return ProcessResult(
                exit_code=EXIT_NOT_EXECUTABLE,
                stderr=f"{command[0]}: permission denied",
                duration_ms=_elapsed_ms(start_time),
            )
        except subprocess.TimeoutExpired as e:
            self._log.warning("process_timeout", executable=command[0], timeout=timeout)
            return ProcessResult(
                exit_code=EXIT_TIMED_OUT,
                stdout=_decode(e.stdout),
                stderr=f"Process timed out after {timeout}s",
                duration_ms=_elapsed_ms(start_time),
                timed_out=True,
            )

        duration_ms = _elapsed_ms(start_time)
        self._log.debug(
            "process_completed",
            exit_code=completed.returncode,
            duration_ms=duration_ms,
        )
        return ProcessResult(
            exit_code=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            duration_ms=duration_ms,
        )


def _elapsed_ms(start_time: float) -> int:
    return int((time.monotonic() - start_time) * 1000)


def _decode(data: str | bytes | None) -> str:
    # TimeoutExpired carries bytes even when text=True was requested
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode(errors="replace")
    return data
