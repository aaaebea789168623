"""Toolchain resolution entities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

ARTIFACT_NAME = "solution"


class ToolchainKind(str, Enum):
    """Languages the harness can compile and run."""

    C = "c"
    CPP = "cpp"
    JAVA = "java"
    PYTHON = "python"


TOOLCHAIN_BY_EXTENSION = {
    ".c": ToolchainKind.C,
    ".cpp": ToolchainKind.CPP,
    ".java": ToolchainKind.JAVA,
    ".py": ToolchainKind.PYTHON,
}


@dataclass(frozen=True)
class RunArtifact:
    """Ready-to-execute command and the working directory it must run in."""

    kind: ToolchainKind
    command: tuple[str, ...]
    working_dir: Path
