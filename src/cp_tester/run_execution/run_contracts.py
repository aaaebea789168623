"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from cp_tester.configuration.runtime_settings import (
    DEFAULT_CPP_VERSION,
    SUPPORTED_CPP_VERSIONS,
    ToolchainSettings,
)
from cp_tester.output_comparison import ComparisonMode
from cp_tester.verdict_reporting import CaseVerdict


@dataclass(frozen=True)
class RunRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for one `run` invocation, as parsed from the command line."""

    test_dir: str
    source_file: str
    case_names: tuple[str, ...] | None = None
    show_input: bool = False
    compare_output: bool = False
    cpp_version: str | None = None
    timeout_ms: int | None = None
    input_extension: str = "in"
    output_extension: str = "out"
    io_names: tuple[str, ...] = ()
    comparison_mode: str | None = None
    keep_going: bool = False
    config_path: str | None = None


@dataclass(frozen=True)
class ExecutionConfig:  # pylint: disable=too-many-instance-attributes
    """Everything one execution session needs besides the test itself."""

    source_file: Path
    timeout_ms: int
    cpp_version: str = DEFAULT_CPP_VERSION
    selected_case_names: frozenset[str] | None = None
    show_input: bool = False
    compare_output: bool = False
    unicode_output: bool = False
    toolchains: ToolchainSettings = field(default_factory=ToolchainSettings)
    comparison_mode: ComparisonMode = ComparisonMode.TRIMMED
    fail_fast: bool = True

    def __post_init__(self) -> None:
        if self.cpp_version not in SUPPORTED_CPP_VERSIONS:
            supported = ", ".join(SUPPORTED_CPP_VERSIONS)
            raise ValueError(f"C++ version must be one of: {supported}.")
        if self.timeout_ms < 0:
            raise ValueError("Timeout must not be negative.")


class SessionState(str, Enum):
    """Lifecycle of one execution session."""

    PENDING = "pending"
    COMPILING = "compiling"
    COMPILE_FAILED = "compile_failed"
    READY = "ready"
    RUNNING = "running"
    CASE_COMPLETE = "case_complete"
    TIMED_OUT = "timed_out"
    NON_ZERO_EXIT = "non_zero_exit"
    FAILED = "failed"
    DONE = "done"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {
        SessionState.COMPILE_FAILED,
        SessionState.TIMED_OUT,
        SessionState.NON_ZERO_EXIT,
        SessionState.FAILED,
        SessionState.DONE,
    }
)


@dataclass(frozen=True)
class SessionOutcome:
    """Output contract for one completed session."""

    state: SessionState
    verdicts: tuple[CaseVerdict, ...]
    history: tuple[SessionState, ...]

    @property
    def all_passed(self) -> bool:
        return all(verdict.passed for verdict in self.verdicts)
