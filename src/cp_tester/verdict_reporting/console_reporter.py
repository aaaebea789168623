"""Terminal rendering of case verdicts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

import click

from .verdict_models import CaseVerdict, VerdictStatus

Echo = Callable[..., None]


@dataclass(frozen=True)
class SymbolSet:
    """Text printed for each verdict status."""

    passed: str
    failed: str
    timed_out: str
    runtime_error: str

    def for_status(self, status: VerdictStatus) -> str:
        return {
            VerdictStatus.PASSED: self.passed,
            VerdictStatus.FAILED: self.failed,
            VerdictStatus.TIMED_OUT: self.timed_out,
            VerdictStatus.RUNTIME_ERROR: self.runtime_error,
        }[status]


PLAIN_SYMBOLS = SymbolSet(
    passed=VerdictStatus.PASSED.value,
    failed=VerdictStatus.FAILED.value,
    timed_out=VerdictStatus.TIMED_OUT.value,
    runtime_error=VerdictStatus.RUNTIME_ERROR.value,
)
UNICODE_SYMBOLS = SymbolSet(
    passed="✅",
    failed=click.style("❌", fg="red"),
    timed_out=click.style("⌛", fg="red"),
    runtime_error=click.style("\U0001f4a5", fg="red"),
)


class ConsoleVerdictReporter:
    """Print each verdict as soon as its case finishes."""

    def __init__(
        self,
        *,
        show_input: bool = False,
        compare_output: bool = False,
        unicode_output: bool = False,
        echo: Echo | None = None,
    ) -> None:
        self._show_input = show_input
        self._compare_output = compare_output
        self._symbols = UNICODE_SYMBOLS if unicode_output else PLAIN_SYMBOLS
        self._echo = echo or click.echo

    def report(self, verdict: CaseVerdict) -> None:
        echo = self._echo
        echo(f"Test Case {verdict.case_name}: ", nl=False)
        if self._show_input:
            echo()
            echo("Input:")
            echo(_indent(verdict.input_text))
        if self._compare_output and verdict.actual_output is not None:
            echo()
            echo("Correct Output:")
            echo(_indent(verdict.expected_output))
            echo("Program Output:")
            echo(_indent(verdict.actual_output))
        echo(f"Time Taken: {verdict.elapsed_ms} milliseconds")
        if verdict.detail:
            echo(verdict.detail)
        echo(self._symbols.for_status(verdict.status))


def _indent(text: str) -> str:
    return "\n".join(f"\t{line}" for line in text.splitlines())
