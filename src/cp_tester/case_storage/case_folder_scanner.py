"""Populate tests from folders of `<name>.<ext>` case files."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from cp_tester.errors import CaseIOFailed, FailureStage, NoCasesAvailable

from .case_models import IOMode, StoredCase, StoredTest

_LOGGER = logging.getLogger(__name__)


def scan_case_folder(
    folder: Path | str, input_extension: str, output_extension: str
) -> dict[str, StoredCase]:
    """Read every input file that has a sibling output file with the same stem.

    Input files without a matching output file are skipped silently. A folder that yields no
    pair at all raises `NoCasesAvailable`.
    """
    folder_path = Path(folder)
    try:
        entries = sorted(folder_path.iterdir())
    except OSError as exc:
        raise CaseIOFailed(f"invalid folder, can't read directory {folder_path}: {exc}") from exc

    pairs: list[tuple[str, Path, Path]] = []
    for entry in entries:
        if not entry.is_file() or entry.suffix != f".{input_extension}":
            continue
        output_file = entry.with_suffix(f".{output_extension}")
        if not output_file.is_file():
            _LOGGER.debug("Skipping %s, no matching %s file", entry.name, output_file.name)
            continue
        pairs.append((entry.stem, entry, output_file))

    if not pairs:
        raise NoCasesAvailable(folder_path, input_extension, output_extension)

    cases: dict[str, StoredCase] = {}
    for name, input_file, output_file in pairs:
        try:
            input_data = input_file.read_bytes()
            output_data = output_file.read_bytes()
        except OSError as exc:
            raise CaseIOFailed(f"can't read case files: {exc}", case_name=name) from exc
        cases[name] = StoredCase.from_bytes(name, input_data, output_data)
    _LOGGER.debug("Loaded %d case(s) from %s", len(cases), folder_path)
    return cases


def load_test_from_folder(  # pylint: disable=too-many-arguments
    folder: Path | str,
    input_extension: str,
    output_extension: str,
    input_mode: IOMode | None = None,
    output_mode: IOMode | None = None,
    provenance: object | None = None,
) -> StoredTest:
    """Build a test from the case files in `folder`."""
    return StoredTest(
        cases=scan_case_folder(folder, input_extension, output_extension),
        input_extension=input_extension,
        output_extension=output_extension,
        input_mode=input_mode or IOMode.standard(),
        output_mode=output_mode or IOMode.standard(),
        provenance=provenance,
    )


def io_modes_from_names(names: Sequence[str]) -> tuple[IOMode, IOMode]:
    """Build input/output routing from zero, one (shared) or two file names."""
    if not names:
        return IOMode.standard(), IOMode.standard()
    if len(names) == 1:
        return IOMode.file(names[0]), IOMode.file(names[0])
    if len(names) == 2:
        return IOMode.file(names[0]), IOMode.file(names[1])
    raise ValueError("At most two I/O file names are allowed (input, output).")
