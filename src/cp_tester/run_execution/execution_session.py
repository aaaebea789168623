"""Compile once, then run every selected case in a disposable working directory."""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from cp_tester.case_storage.case_models import StoredCase, StoredTest
from cp_tester.errors import (
    CaseIOFailed,
    CaseNonZeroExit,
    CaseTimedOut,
    CompileFailed,
    FailureStage,
    HarnessError,
    InvalidCaseText,
    JavaClassNotFound,
    ToolchainInvocationFailed,
)
from cp_tester.process_supervision import (
    ProcessFinished,
    ProcessRunner,
    ProcessTimedOut,
    run_with_deadline,
)
from cp_tester.toolchain_resolution import CommandRunner, RunArtifact, resolve_run_artifact
from cp_tester.verdict_reporting import (
    CaseVerdict,
    ConsoleVerdictReporter,
    VerdictReporter,
    VerdictStatus,
    build_case_verdict,
)

from .run_contracts import ExecutionConfig, SessionOutcome, SessionState

_LOGGER = logging.getLogger(__name__)

_WORKING_DIR_PREFIX = "cp-tester-"


class ExecutionSession:
    """Single-use orchestration of compile-then-run-per-case for one test."""

    def __init__(
        self,
        test: StoredTest,
        config: ExecutionConfig,
        *,
        reporter: VerdictReporter | None = None,
        process_runner: ProcessRunner | None = None,
        command_runner: CommandRunner | None = None,
    ) -> None:
        self._test = test
        self._config = config
        self._reporter = reporter or ConsoleVerdictReporter(
            show_input=config.show_input,
            compare_output=config.compare_output,
            unicode_output=config.unicode_output,
        )
        self._process_runner = process_runner or run_with_deadline
        self._command_runner = command_runner
        self._history: list[SessionState] = [SessionState.PENDING]
        self._verdicts: list[CaseVerdict] = []

    @property
    def state(self) -> SessionState:
        return self._history[-1]

    def run(self) -> SessionOutcome:
        """Run the session to completion or raise the first terminal `HarnessError`."""
        if self.state != SessionState.PENDING:
            raise RuntimeError("An execution session can only be run once.")
        try:
            selected = self._test.select_cases(self._config.selected_case_names)
            with tempfile.TemporaryDirectory(prefix=_WORKING_DIR_PREFIX) as raw_dir:
                artifact = self._compile(Path(raw_dir).resolve())
                for case_name, case in selected.iter_cases():
                    self._transition(SessionState.RUNNING, case_name)
                    self._run_case(artifact, selected, case_name, case)
                    self._transition(SessionState.CASE_COMPLETE, case_name)
        except CaseTimedOut:
            self._transition(SessionState.TIMED_OUT)
            raise
        except CaseNonZeroExit:
            self._transition(SessionState.NON_ZERO_EXIT)
            raise
        except HarnessError:
            if not self.state.is_terminal:
                self._transition(SessionState.FAILED)
            raise
        self._transition(SessionState.DONE)
        return SessionOutcome(
            state=self.state,
            verdicts=tuple(self._verdicts),
            history=tuple(self._history),
        )

    def _compile(self, working_dir: Path) -> RunArtifact:
        self._transition(SessionState.COMPILING)
        try:
            artifact = resolve_run_artifact(
                self._config.source_file,
                working_dir,
                toolchains=self._config.toolchains,
                cpp_version=self._config.cpp_version,
                command_runner=self._command_runner,
            )
        except (CompileFailed, JavaClassNotFound, ToolchainInvocationFailed):
            self._transition(SessionState.COMPILE_FAILED)
            raise
        self._transition(SessionState.READY)
        return artifact

    def _run_case(
        self, artifact: RunArtifact, test: StoredTest, case_name: str, case: StoredCase
    ) -> None:
        # Stale output goes first: input and output routing may name the same file.
        output_path = test.output_path(artifact.working_dir)
        if output_path is not None:
            output_path.unlink(missing_ok=True)
        stdin_data = self._materialize_input(artifact.working_dir, test, case_name, case)

        try:
            outcome = self._process_runner(
                artifact.command,
                cwd=artifact.working_dir,
                stdin_data=stdin_data,
                timeout_ms=self._config.timeout_ms or None,
            )
        except ToolchainInvocationFailed as exc:
            raise type(exc)(exc.command, exc.reason, case_name=case_name) from exc

        if isinstance(outcome, ProcessTimedOut):
            if self._config.fail_fast:
                raise CaseTimedOut(case_name, self._config.timeout_ms)
            self._record(
                CaseVerdict(
                    case_name=case_name,
                    status=VerdictStatus.TIMED_OUT,
                    elapsed_ms=outcome.elapsed_ms,
                    input_text=case.input,
                    expected_output=case.output,
                    detail=f"Timed out after {self._config.timeout_ms} milliseconds",
                )
            )
            return

        if not outcome.succeeded:
            stderr = outcome.stderr.decode("utf-8", errors="replace")
            if self._config.fail_fast:
                raise CaseNonZeroExit(case_name, outcome.exit_code, stderr)
            self._record(
                CaseVerdict(
                    case_name=case_name,
                    status=VerdictStatus.RUNTIME_ERROR,
                    elapsed_ms=outcome.elapsed_ms,
                    input_text=case.input,
                    expected_output=case.output,
                    detail=f"Exit code: {outcome.exit_code}",
                )
            )
            return

        actual_output = self._capture_output(outcome, output_path, case_name)
        self._record(
            build_case_verdict(
                case_name,
                case,
                actual_output,
                outcome.elapsed_ms,
                self._config.comparison_mode,
            )
        )

    def _materialize_input(
        self, working_dir: Path, test: StoredTest, case_name: str, case: StoredCase
    ) -> bytes | None:
        input_path = test.input_path(working_dir)
        if input_path is None:
            return case.input.encode("utf-8")
        try:
            input_path.parent.mkdir(parents=True, exist_ok=True)
            input_path.write_text(case.input, encoding="utf-8", newline="")
        except OSError as exc:
            raise CaseIOFailed(
                f"failed to write test case input to {input_path}: {exc}", case_name=case_name
            ) from exc
        return None

    def _capture_output(
        self, outcome: ProcessFinished, output_path: Path | None, case_name: str
    ) -> str:
        if output_path is None:
            raw_output = outcome.stdout
        else:
            try:
                raw_output = output_path.read_bytes()
            except OSError as exc:
                raise CaseIOFailed(
                    f"failed to read program output from {output_path.name}: {exc}",
                    case_name=case_name,
                ) from exc
        try:
            return raw_output.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidCaseText(case_name, "program output", stage=FailureStage.COMPARE) from exc

    def _record(self, verdict: CaseVerdict) -> None:
        self._verdicts.append(verdict)
        self._reporter.report(verdict)

    def _transition(self, state: SessionState, case_name: str | None = None) -> None:
        self._history.append(state)
        if case_name is None:
            _LOGGER.debug("Session state: %s", state.value)
        else:
            _LOGGER.debug("Session state: %s (case %s)", state.value, case_name)


def run_execution_session(
    test: StoredTest,
    config: ExecutionConfig,
    *,
    reporter: VerdictReporter | None = None,
    process_runner: ProcessRunner | None = None,
    command_runner: CommandRunner | None = None,
) -> SessionOutcome:
    """Create a fresh session for `test` and run it."""
    session = ExecutionSession(
        test,
        config,
        reporter=reporter,
        process_runner=process_runner,
        command_runner=command_runner,
    )
    return session.run()
