"""Run use-case integration tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
from cp_tester.configuration.runtime_settings import HarnessSettings
from cp_tester.output_comparison import ComparisonMode
from cp_tester.run_execution import (
    RunExecutionError,
    RunRequest,
    SessionState,
    build_execution_config,
    execute_case_run,
)
from cp_tester.verdict_reporting import CaseVerdict


class CollectingReporter:
    def __init__(self) -> None:
        self.verdicts: list[CaseVerdict] = []

    def report(self, verdict: CaseVerdict) -> None:
        self.verdicts.append(verdict)


def _prepare(tmp_path: Path) -> tuple[Path, Path, Path]:
    cases = tmp_path / "cases"
    cases.mkdir()
    (cases / "1.txt").write_text("hello\n", encoding="utf-8")
    (cases / "1.ans").write_text("HELLO\n", encoding="utf-8")
    source = tmp_path / "upper.py"
    source.write_text("print(input().upper())\n", encoding="utf-8")
    config = tmp_path / "cp-tester.yaml"
    config.write_text(
        f"toolchains:\n  python:\n    executable: '{sys.executable}'\n", encoding="utf-8"
    )
    return cases, source, config


def test_execute_case_run_with_custom_extensions(tmp_path: Path) -> None:
    cases, source, config = _prepare(tmp_path)
    reporter = CollectingReporter()

    outcome = execute_case_run(
        RunRequest(
            test_dir=str(cases),
            source_file=str(source),
            input_extension="txt",
            output_extension="ans",
            config_path=str(config),
        ),
        reporter=reporter,
    )

    assert outcome.state == SessionState.DONE
    assert outcome.all_passed
    assert len(reporter.verdicts) == 1


def test_execute_case_run_wraps_harness_errors(tmp_path: Path) -> None:
    cases, source, config = _prepare(tmp_path)

    with pytest.raises(RunExecutionError, match="no test cases found"):
        execute_case_run(
            RunRequest(test_dir=str(cases), source_file=str(source), config_path=str(config)),
            reporter=CollectingReporter(),
        )


def test_execute_case_run_wraps_unknown_case(tmp_path: Path) -> None:
    cases, source, config = _prepare(tmp_path)

    with pytest.raises(RunExecutionError, match='"2" does not exist'):
        execute_case_run(
            RunRequest(
                test_dir=str(cases),
                source_file=str(source),
                case_names=("2",),
                input_extension="txt",
                output_extension="ans",
                config_path=str(config),
            ),
            reporter=CollectingReporter(),
        )


def test_build_execution_config_prefers_command_line_values(tmp_path: Path) -> None:
    settings = HarnessSettings(default_cpp_version="14", default_timeout_ms=2000)
    request = RunRequest(
        test_dir=str(tmp_path),
        source_file="main.cpp",
        case_names=("1", "2"),
        cpp_version="20",
        timeout_ms=0,
        comparison_mode="tokens",
        keep_going=True,
    )

    config = build_execution_config(request, settings, tmp_path / "main.cpp")

    assert config.cpp_version == "20"
    assert config.timeout_ms == 0
    assert config.selected_case_names == frozenset({"1", "2"})
    assert config.comparison_mode == ComparisonMode.TOKENS
    assert config.fail_fast is False


def test_build_execution_config_falls_back_to_settings(tmp_path: Path) -> None:
    settings = HarnessSettings(default_cpp_version="14", default_timeout_ms=2000)
    request = RunRequest(test_dir=str(tmp_path), source_file="main.cpp")

    config = build_execution_config(request, settings, tmp_path / "main.cpp")

    assert config.cpp_version == "14"
    assert config.timeout_ms == 2000
    assert config.selected_case_names is None
    assert config.comparison_mode == ComparisonMode.TRIMMED
    assert config.fail_fast is True
