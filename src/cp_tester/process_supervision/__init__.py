"""Process supervision exports."""

from .deadline_runner import (
    ProcessFinished,
    ProcessOutcome,
    ProcessRunner,
    ProcessTimedOut,
    run_with_deadline,
)

__all__ = [
    "ProcessFinished",
    "ProcessOutcome",
    "ProcessRunner",
    "ProcessTimedOut",
    "run_with_deadline",
]
