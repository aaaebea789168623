"""Verdict reporting entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from cp_tester.case_storage.case_models import StoredCase
from cp_tester.output_comparison import ComparisonMode, outputs_match


class VerdictStatus(str, Enum):
    """Rendered outcome of one case."""

    PASSED = "PASSED"
    FAILED = "FAILED"
    TIMED_OUT = "TIMED OUT"
    RUNTIME_ERROR = "RUNTIME ERROR"


@dataclass(frozen=True)
class CaseVerdict:  # pylint: disable=too-many-instance-attributes
    """Outcome and timing of one case."""

    case_name: str
    status: VerdictStatus
    elapsed_ms: int
    input_text: str
    expected_output: str
    actual_output: str | None = None
    detail: str = ""

    @property
    def passed(self) -> bool:
        return self.status == VerdictStatus.PASSED


class VerdictReporter(Protocol):
    def report(self, verdict: CaseVerdict) -> None: ...


def build_case_verdict(
    case_name: str,
    case: StoredCase,
    actual_output: str,
    elapsed_ms: int,
    mode: ComparisonMode = ComparisonMode.TRIMMED,
) -> CaseVerdict:
    """Compare captured output with the case's expected output."""
    passed = outputs_match(case.output, actual_output, mode)
    return CaseVerdict(
        case_name=case_name,
        status=VerdictStatus.PASSED if passed else VerdictStatus.FAILED,
        elapsed_ms=elapsed_ms,
        input_text=case.input,
        expected_output=case.output,
        actual_output=actual_output,
    )
