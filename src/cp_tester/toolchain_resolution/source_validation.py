"""Checks applied to a candidate source file before any process is spawned."""

from __future__ import annotations

from pathlib import Path

from cp_tester.errors import UnsupportedFileType

from .toolchain_models import TOOLCHAIN_BY_EXTENSION, ToolchainKind


def validate_source_file(source_file: Path | str) -> Path:
    """Return the absolute path of an existing source file with a supported extension."""
    path = Path(source_file)
    if not path.exists():
        raise UnsupportedFileType(f'there is no file at path: "{path}"')
    if not path.is_file():
        raise UnsupportedFileType(f'path "{path}" is a folder, a source file is required')
    toolchain_kind_for(path)
    return path.resolve()


def toolchain_kind_for(source_file: Path) -> ToolchainKind:
    """Map a source file extension to its toolchain."""
    kind = TOOLCHAIN_BY_EXTENSION.get(source_file.suffix)
    if kind is None:
        shown = source_file.suffix or "(none)"
        raise UnsupportedFileType(
            f'file has extension "{shown}", which is invalid, only C (.c), C++ (.cpp), '
            "Java (.java), and Python (.py) are supported"
        )
    return kind
