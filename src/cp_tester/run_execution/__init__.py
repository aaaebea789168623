"""Run execution domain exports."""

from .case_run_use_case import RunExecutionError, build_execution_config, execute_case_run
from .execution_session import ExecutionSession, run_execution_session
from .run_contracts import ExecutionConfig, RunRequest, SessionOutcome, SessionState

__all__ = [
    "RunRequest",
    "ExecutionConfig",
    "SessionOutcome",
    "SessionState",
    "ExecutionSession",
    "run_execution_session",
    "RunExecutionError",
    "build_execution_config",
    "execute_case_run",
]
