"""Error taxonomy shared by the case store, toolchains and execution session."""

from __future__ import annotations

from enum import Enum
from pathlib import Path


class FailureStage(str, Enum):
    """Stage of a test run in which a terminal error occurred."""

    LOAD = "load"
    SELECT = "select"
    RESOLVE = "resolve"
    COMPILE = "compile"
    RUN = "run"
    TIMEOUT = "timeout"
    COMPARE = "compare"


class HarnessError(Exception):
    """Base class for every error that ends a test run."""

    stage = FailureStage.RUN

    def __init__(self, detail: str, *, case_name: str | None = None) -> None:
        self.detail = detail
        self.case_name = case_name
        super().__init__(self._render())

    def _render(self) -> str:
        scope = f' for case "{self.case_name}"' if self.case_name is not None else ""
        return f"{self.stage.value} failed{scope}: {self.detail}"


class UnsupportedFileType(HarnessError):
    """Raised when the source file cannot be mapped to a toolchain."""

    stage = FailureStage.RESOLVE


class ToolchainInvocationFailed(HarnessError):
    """Raised when a compiler or program cannot be spawned."""

    stage = FailureStage.RESOLVE

    def __init__(self, command: tuple[str, ...], reason: str, *, case_name: str | None = None):
        self.command = command
        self.reason = reason
        super().__init__(f"could not start {command[0]!r}: {reason}", case_name=case_name)


class ToolchainMissing(ToolchainInvocationFailed):
    """Raised when the executable is not available on the system path."""


class CompileFailed(HarnessError):
    """Raised when the compiler exits with a non-zero status."""

    stage = FailureStage.COMPILE

    def __init__(self, exit_code: int, stdout: str, stderr: str) -> None:
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"compiler exited with non-zero exit code: {exit_code}\n"
            f"Stdout: {stdout}\nStderr: {stderr}"
        )


class JavaClassNotFound(HarnessError):
    """Raised when javac did not produce a class named after the source file."""

    stage = FailureStage.COMPILE

    def __init__(self, expected_class_file: Path) -> None:
        self.expected_class_file = expected_class_file
        super().__init__(
            f'failed to find class file "{expected_class_file}". '
            "The class name must be the same as the file name"
        )


class CaseTimedOut(HarnessError):
    """Raised when a case exceeds the configured wall-clock limit."""

    stage = FailureStage.TIMEOUT

    def __init__(self, case_name: str, timeout_ms: int) -> None:
        self.timeout_ms = timeout_ms
        super().__init__(
            f"program timed out after {timeout_ms} milliseconds, "
            "use --timeout to change the limit",
            case_name=case_name,
        )


class CaseNonZeroExit(HarnessError):
    """Raised when the program under test exits with a failure status."""

    stage = FailureStage.RUN

    def __init__(self, case_name: str, exit_code: int, stderr: str = "") -> None:
        self.exit_code = exit_code
        self.stderr = stderr
        detail = f"program exited with non-zero exit code: {exit_code}"
        if stderr.strip():
            detail += f"\nStderr: {stderr.rstrip()}"
        super().__init__(detail, case_name=case_name)


class InvalidCaseText(HarnessError):
    """Raised when stored case text or captured output is not valid UTF-8."""

    stage = FailureStage.COMPARE

    def __init__(
        self, case_name: str, source: str, *, stage: FailureStage = FailureStage.COMPARE
    ) -> None:
        self.source = source
        self.stage = stage
        super().__init__(f"{source} is not valid UTF-8 text", case_name=case_name)


class CaseNotFound(HarnessError):
    """Raised when a selected case name does not exist in the test."""

    stage = FailureStage.SELECT

    def __init__(self, case_name: str) -> None:
        super().__init__(f'test case with name "{case_name}" does not exist', case_name=case_name)


class NoCasesAvailable(HarnessError):
    """Raised when a folder scan finds no input/output pairs."""

    stage = FailureStage.LOAD

    def __init__(self, folder: Path, input_extension: str, output_extension: str) -> None:
        self.folder = folder
        super().__init__(
            f"no test cases found in {folder} "
            f'(input extension is ".{input_extension}", output extension is ".{output_extension}")'
        )


class CaseIOFailed(HarnessError):
    """Raised when routed case input or output cannot be written or read."""

    stage = FailureStage.RUN
