"""Tests for verdict construction and console rendering."""

from __future__ import annotations

import pytest
from cp_tester.case_storage.case_models import StoredCase
from cp_tester.output_comparison import ComparisonMode
from cp_tester.verdict_reporting import (
    ConsoleVerdictReporter,
    VerdictStatus,
    build_case_verdict,
)
from cp_tester.verdict_reporting.verdict_models import CaseVerdict


def test_build_case_verdict_passes_on_trimmed_match() -> None:
    verdict = build_case_verdict("1", StoredCase(input="3 4\n", output="7\n"), "7", 12)

    assert verdict.status == VerdictStatus.PASSED
    assert verdict.passed
    assert verdict.elapsed_ms == 12
    assert verdict.actual_output == "7"


def test_build_case_verdict_respects_mode() -> None:
    case = StoredCase(input="", output="1 2\n")

    assert build_case_verdict("1", case, "1\n2", 0).status == VerdictStatus.FAILED
    assert build_case_verdict("1", case, "1\n2", 0, ComparisonMode.TOKENS).passed


def test_report_prints_name_time_and_status(capsys: pytest.CaptureFixture[str]) -> None:
    reporter = ConsoleVerdictReporter()

    reporter.report(build_case_verdict("1", StoredCase(input="3 4", output="7"), "8", 5))

    assert capsys.readouterr().out == "Test Case 1: Time Taken: 5 milliseconds\nFAILED\n"


def test_report_shows_input_and_output_comparison(capsys: pytest.CaptureFixture[str]) -> None:
    reporter = ConsoleVerdictReporter(show_input=True, compare_output=True)

    reporter.report(build_case_verdict("2", StoredCase(input="3 4\n", output="7\n"), "7\n", 1))

    assert capsys.readouterr().out == (
        "Test Case 2: \n"
        "Input:\n"
        "\t3 4\n"
        "\n"
        "Correct Output:\n"
        "\t7\n"
        "Program Output:\n"
        "\t7\n"
        "Time Taken: 1 milliseconds\n"
        "PASSED\n"
    )


def test_report_skips_comparison_without_captured_output() -> None:
    lines: list[str] = []
    reporter = ConsoleVerdictReporter(
        compare_output=True,
        echo=lambda message="", nl=True: lines.append(str(message)),
    )

    reporter.report(
        CaseVerdict(
            case_name="3",
            status=VerdictStatus.TIMED_OUT,
            elapsed_ms=100,
            input_text="",
            expected_output="1",
            detail="Time limit: 100 ms",
        )
    )

    assert "Correct Output:" not in lines
    assert lines[-2:] == ["Time limit: 100 ms", "TIMED OUT"]


def test_unicode_symbols_replace_status_text() -> None:
    lines: list[str] = []
    reporter = ConsoleVerdictReporter(
        unicode_output=True,
        echo=lambda message="", nl=True: lines.append(str(message)),
    )

    reporter.report(build_case_verdict("1", StoredCase(input="", output="1"), "1", 0))

    assert lines[-1] == "✅"
