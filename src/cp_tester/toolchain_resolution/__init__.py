"""Toolchain resolution exports."""

from .source_validation import toolchain_kind_for, validate_source_file
from .toolchain_models import ARTIFACT_NAME, TOOLCHAIN_BY_EXTENSION, RunArtifact, ToolchainKind
from .toolchain_strategies import (
    CommandRunner,
    CompilerResult,
    CppToolchain,
    JavaToolchain,
    NativeToolchain,
    PythonToolchain,
    Toolchain,
    build_toolchain,
    resolve_run_artifact,
)

__all__ = [
    "ARTIFACT_NAME",
    "TOOLCHAIN_BY_EXTENSION",
    "RunArtifact",
    "ToolchainKind",
    "toolchain_kind_for",
    "validate_source_file",
    "CommandRunner",
    "CompilerResult",
    "Toolchain",
    "NativeToolchain",
    "CppToolchain",
    "JavaToolchain",
    "PythonToolchain",
    "build_toolchain",
    "resolve_run_artifact",
]
