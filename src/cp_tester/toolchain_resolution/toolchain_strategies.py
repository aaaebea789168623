"""Compile-then-run recipes, one strategy per supported language."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from cp_tester.configuration.runtime_settings import (
    SUPPORTED_CPP_VERSIONS,
    ToolchainSetting,
    ToolchainSettings,
)
from cp_tester.errors import (
    CompileFailed,
    JavaClassNotFound,
    ToolchainInvocationFailed,
    ToolchainMissing,
)

from .source_validation import toolchain_kind_for, validate_source_file
from .toolchain_models import ARTIFACT_NAME, RunArtifact, ToolchainKind

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompilerResult:
    """Exit status and captured streams of one compiler invocation."""

    exit_code: int
    stdout: str
    stderr: str


CommandRunner = Callable[[tuple[str, ...], Path], CompilerResult]


def _run_compiler_command(command: tuple[str, ...], cwd: Path) -> CompilerResult:
    """Run one compiler command and wrap spawn errors with domain-friendly messages."""
    _LOGGER.debug("Compiling: %s", shlex.join(command))
    try:
        completed = subprocess.run(list(command), cwd=cwd, capture_output=True, check=False)
    except FileNotFoundError as exc:
        raise ToolchainMissing(command, "executable not found on PATH") from exc
    except OSError as exc:
        raise ToolchainInvocationFailed(command, str(exc)) from exc
    return CompilerResult(
        exit_code=completed.returncode,
        stdout=completed.stdout.decode("utf-8", errors="replace"),
        stderr=completed.stderr.decode("utf-8", errors="replace"),
    )


def _check_compiled(result: CompilerResult) -> None:
    if result.exit_code != 0:
        raise CompileFailed(result.exit_code, result.stdout, result.stderr)


class Toolchain(Protocol):
    kind: ToolchainKind

    def compile_if_needed(self, source_file: Path, working_dir: Path) -> None: ...

    def build_run_command(self, source_file: Path, working_dir: Path) -> tuple[str, ...]: ...


class NativeToolchain:
    """gcc/g++ style compiler writing a binary into the working directory."""

    kind = ToolchainKind.C

    def __init__(self, compiler: ToolchainSetting, command_runner: CommandRunner) -> None:
        self._compiler = compiler
        self._run = command_runner

    def compile_command(self, source_file: Path, working_dir: Path) -> tuple[str, ...]:
        return (
            self._compiler.executable,
            "-o",
            str(working_dir / ARTIFACT_NAME),
            *self._extra_arguments(),
            str(source_file),
            *self._compiler.rendered_flags(),
        )

    def _extra_arguments(self) -> tuple[str, ...]:
        return ()

    def compile_if_needed(self, source_file: Path, working_dir: Path) -> None:
        _check_compiled(self._run(self.compile_command(source_file, working_dir), working_dir))

    def build_run_command(self, source_file: Path, working_dir: Path) -> tuple[str, ...]:
        return (str(working_dir / ARTIFACT_NAME),)


class CppToolchain(NativeToolchain):
    """g++ with an explicit `-std=c++NN` language level."""

    kind = ToolchainKind.CPP

    def __init__(
        self, compiler: ToolchainSetting, cpp_version: str, command_runner: CommandRunner
    ) -> None:
        if cpp_version not in SUPPORTED_CPP_VERSIONS:
            raise ValueError(f"Unsupported C++ version: {cpp_version}")
        super().__init__(compiler, command_runner)
        self.cpp_version = cpp_version

    def _extra_arguments(self) -> tuple[str, ...]:
        return (f"-std=c++{self.cpp_version}",)


class JavaToolchain:
    """javac into the working directory, then `java <ClassName>` from inside it."""

    kind = ToolchainKind.JAVA

    def __init__(
        self,
        compiler: ToolchainSetting,
        launcher: ToolchainSetting,
        command_runner: CommandRunner,
    ) -> None:
        self._compiler = compiler
        self._launcher = launcher
        self._run = command_runner

    def compile_command(self, source_file: Path, working_dir: Path) -> tuple[str, ...]:
        return (*self._compiler.command_prefix(), "-d", str(working_dir), str(source_file))

    def compile_if_needed(self, source_file: Path, working_dir: Path) -> None:
        _check_compiled(self._run(self.compile_command(source_file, working_dir), working_dir))
        class_file = working_dir / f"{source_file.stem}.class"
        if not class_file.is_file():
            raise JavaClassNotFound(class_file)

    def build_run_command(self, source_file: Path, working_dir: Path) -> tuple[str, ...]:
        return (*self._launcher.command_prefix(), source_file.stem)


class PythonToolchain:
    """No compile step; the interpreter runs the source file in optimized mode."""

    kind = ToolchainKind.PYTHON

    def __init__(self, interpreter: ToolchainSetting) -> None:
        self._interpreter = interpreter

    def compile_if_needed(self, source_file: Path, working_dir: Path) -> None:
        return None

    def build_run_command(self, source_file: Path, working_dir: Path) -> tuple[str, ...]:
        return (*self._interpreter.command_prefix(), "-O", str(source_file))


def build_toolchain(
    kind: ToolchainKind,
    *,
    toolchains: ToolchainSettings,
    cpp_version: str,
    command_runner: CommandRunner | None = None,
) -> Toolchain:
    """Create the strategy for one toolchain kind."""
    runner = command_runner or _run_compiler_command
    if kind == ToolchainKind.C:
        return NativeToolchain(toolchains.gcc, runner)
    if kind == ToolchainKind.CPP:
        return CppToolchain(toolchains.gpp, cpp_version, runner)
    if kind == ToolchainKind.JAVA:
        return JavaToolchain(toolchains.javac, toolchains.java, runner)
    return PythonToolchain(toolchains.python)


def resolve_run_artifact(
    source_file: Path | str,
    working_dir: Path,
    *,
    toolchains: ToolchainSettings,
    cpp_version: str,
    command_runner: CommandRunner | None = None,
) -> RunArtifact:
    """Compile `source_file` into `working_dir` when needed and return its run command."""
    source_path = validate_source_file(source_file)
    toolchain = build_toolchain(
        toolchain_kind_for(source_path),
        toolchains=toolchains,
        cpp_version=cpp_version,
        command_runner=command_runner,
    )
    toolchain.compile_if_needed(source_path, working_dir)
    return RunArtifact(
        kind=toolchain.kind,
        command=toolchain.build_run_command(source_path, working_dir),
        working_dir=working_dir,
    )
