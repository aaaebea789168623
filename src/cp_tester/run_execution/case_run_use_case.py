"""Run execution use-case service."""

from __future__ import annotations

from pathlib import Path

from cp_tester.case_storage import io_modes_from_names, load_test_from_folder
from cp_tester.configuration import ConfigurationError, HarnessSettings, resolve_configuration
from cp_tester.errors import HarnessError
from cp_tester.output_comparison import ComparisonMode
from cp_tester.process_supervision import ProcessRunner
from cp_tester.toolchain_resolution import CommandRunner, validate_source_file
from cp_tester.verdict_reporting import VerdictReporter

from .execution_session import run_execution_session
from .run_contracts import ExecutionConfig, RunRequest, SessionOutcome


class RunExecutionError(Exception):
    """Raised when a run use case cannot be completed."""


def execute_case_run(
    request: RunRequest,
    *,
    reporter: VerdictReporter | None = None,
    process_runner: ProcessRunner | None = None,
    command_runner: CommandRunner | None = None,
) -> SessionOutcome:
    """Load settings and cases, then run one execution session and return its outcome."""
    try:
        settings = resolve_configuration(request.config_path)
        source_file = validate_source_file(request.source_file)
        input_mode, output_mode = io_modes_from_names(request.io_names)
        test = load_test_from_folder(
            Path(request.test_dir),
            request.input_extension,
            request.output_extension,
            input_mode,
            output_mode,
            provenance=Path(request.test_dir).resolve(),
        )
        config = build_execution_config(request, settings, source_file)
        return run_execution_session(
            test,
            config,
            reporter=reporter,
            process_runner=process_runner,
            command_runner=command_runner,
        )
    except (ConfigurationError, HarnessError, ValueError) as exc:
        raise RunExecutionError(str(exc)) from exc


def build_execution_config(
    request: RunRequest, settings: HarnessSettings, source_file: Path
) -> ExecutionConfig:
    """Merge command-line values over resolved settings."""
    timeout_ms = request.timeout_ms
    if timeout_ms is None:
        timeout_ms = settings.default_timeout_ms
    return ExecutionConfig(
        source_file=source_file,
        timeout_ms=timeout_ms,
        cpp_version=request.cpp_version or settings.default_cpp_version,
        selected_case_names=(
            frozenset(request.case_names) if request.case_names is not None else None
        ),
        show_input=request.show_input,
        compare_output=request.compare_output,
        unicode_output=settings.unicode_output,
        toolchains=settings.toolchains,
        comparison_mode=ComparisonMode(request.comparison_mode or settings.comparison_mode),
        fail_fast=not request.keep_going,
    )
