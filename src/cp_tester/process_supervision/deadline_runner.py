"""Run one child process under a wall-clock deadline."""

from __future__ import annotations

import logging
import os
import shlex
import signal
import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from cp_tester.errors import ToolchainInvocationFailed, ToolchainMissing

_LOGGER = logging.getLogger(__name__)

_HAS_PROCESS_GROUPS = hasattr(os, "killpg")
_REAP_TIMEOUT_SECONDS = 1.0


@dataclass(frozen=True)
class ProcessFinished:
    """The child exited on its own before the deadline."""

    exit_code: int
    elapsed_ms: int
    stdout: bytes
    stderr: bytes

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class ProcessTimedOut:
    """The deadline elapsed and the child was killed."""

    timeout_ms: int
    elapsed_ms: int


ProcessOutcome = ProcessFinished | ProcessTimedOut


class ProcessRunner(Protocol):
    def __call__(
        self,
        command: Sequence[str],
        *,
        cwd: Path,
        stdin_data: bytes | None,
        timeout_ms: int | None,
    ) -> ProcessOutcome: ...


def run_with_deadline(
    command: Sequence[str],
    *,
    cwd: Path,
    stdin_data: bytes | None = None,
    timeout_ms: int | None = None,
) -> ProcessOutcome:
    """Spawn `command` in `cwd`, feed `stdin_data`, and wait at most `timeout_ms`.

    A `timeout_ms` of None or 0 waits indefinitely. On timeout the child is killed together
    with every process it spawned into its session, and reaped before this function returns.

    Raises:
      ToolchainMissing: If the executable does not exist.
      ToolchainInvocationFailed: If the process cannot be spawned for another reason.
    """
    argv = tuple(str(part) for part in command)
    try:
        process = subprocess.Popen(  # pylint: disable=consider-using-with
            argv,
            cwd=cwd,
            stdin=subprocess.PIPE if stdin_data is not None else subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            start_new_session=_HAS_PROCESS_GROUPS,
        )
    except FileNotFoundError as exc:
        raise ToolchainMissing(argv, "executable not found on PATH") from exc
    except OSError as exc:
        raise ToolchainInvocationFailed(argv, str(exc)) from exc

    started = time.perf_counter()
    deadline_seconds = timeout_ms / 1000 if timeout_ms else None
    try:
        stdout, stderr = process.communicate(input=stdin_data, timeout=deadline_seconds)
    except subprocess.TimeoutExpired:
        _kill_process_group(process)
        _reap(process)
        elapsed_ms = _elapsed_ms(started)
        _LOGGER.debug("Killed %s after %d ms", shlex.join(argv), elapsed_ms)
        return ProcessTimedOut(timeout_ms=timeout_ms or 0, elapsed_ms=elapsed_ms)
    except BaseException:
        _kill_process_group(process)
        _reap(process)
        raise

    elapsed_ms = _elapsed_ms(started)
    _LOGGER.debug(
        "%s exited with %d after %d ms", shlex.join(argv), process.returncode, elapsed_ms
    )
    return ProcessFinished(
        exit_code=process.returncode,
        elapsed_ms=elapsed_ms,
        stdout=stdout,
        stderr=stderr,
    )


def _kill_process_group(process: subprocess.Popen) -> None:
    """Kill the child and every process it spawned into its session."""
    if not _HAS_PROCESS_GROUPS:
        process.kill()
        return
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        # Group already gone; the direct child may still need reaping.
        process.kill()


def _reap(process: subprocess.Popen) -> None:
    """Wait for the killed child without blocking on pipes held by escaped descendants."""
    try:
        process.communicate(timeout=_REAP_TIMEOUT_SECONDS)
    except subprocess.TimeoutExpired:
        _LOGGER.debug("Output pipes of pid %d still open after kill, closing them", process.pid)
        for stream in (process.stdin, process.stdout, process.stderr):
            if stream is not None:
                stream.close()
        process.wait()


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
