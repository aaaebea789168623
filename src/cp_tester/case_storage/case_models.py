"""Case store entities."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePath

from cp_tester.errors import CaseNotFound, FailureStage, InvalidCaseText

_INTEGER_NAME = re.compile(r"[+-]?\d+")


class IORouting(str, Enum):
    """How case text reaches or leaves the program under test."""

    STANDARD = "standard"
    FILE = "file"


@dataclass(frozen=True)
class IOMode:
    """Routing of one side (input or output) of every case in a test."""

    routing: IORouting
    file_stem: str | None = None

    def __post_init__(self) -> None:
        if self.routing == IORouting.STANDARD:
            if self.file_stem is not None:
                raise ValueError("Standard routing does not take a file name.")
            return
        if not self.file_stem or not self.file_stem.strip():
            raise ValueError("File routing requires a file name.")
        if PurePath(self.file_stem).is_absolute():
            raise ValueError(f"Routed file name must be relative: {self.file_stem}")

    @classmethod
    def standard(cls) -> IOMode:
        return cls(IORouting.STANDARD)

    @classmethod
    def file(cls, file_stem: str) -> IOMode:
        return cls(IORouting.FILE, file_stem)

    @property
    def is_standard(self) -> bool:
        return self.routing == IORouting.STANDARD

    def file_name(self, extension: str) -> str | None:
        """Return `<stem>.<extension>` for file routing, None for standard streams."""
        if self.file_stem is None:
            return None
        return str(PurePath(self.file_stem).with_suffix(f".{extension}"))

    def resolve_in(self, working_dir: Path, extension: str) -> Path | None:
        """Return the routed file path inside the working directory, if any."""
        name = self.file_name(extension)
        return working_dir / name if name is not None else None


@dataclass(frozen=True)
class StoredCase:
    """One input/expected-output pair."""

    input: str
    output: str

    @classmethod
    def from_bytes(cls, case_name: str, input_data: bytes, output_data: bytes) -> StoredCase:
        """Decode raw case files, rejecting anything that is not UTF-8 text."""
        return cls(
            input=_decode_case_text(case_name, input_data, "stored input"),
            output=_decode_case_text(case_name, output_data, "stored output"),
        )


def _decode_case_text(case_name: str, data: bytes, source: str) -> str:
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidCaseText(case_name, source, stage=FailureStage.LOAD) from exc


def sort_case_names(names: Iterable[str]) -> list[str]:
    """Order numerically when every name is an integer, lexicographically otherwise."""
    names = list(names)
    numeric_keys = [_parse_int(name) for name in names]
    if all(key is not None for key in numeric_keys):
        return [name for _, name in sorted(zip(numeric_keys, names), key=lambda pair: pair[0])]
    return sorted(names)


def _parse_int(name: str) -> int | None:
    if _INTEGER_NAME.fullmatch(name) is None:
        return None
    return int(name)


@dataclass(frozen=True)
class StoredTest:  # pylint: disable=too-many-instance-attributes
    """A named collection of cases sharing extensions and I/O routing."""

    cases: Mapping[str, StoredCase]
    input_extension: str
    output_extension: str
    input_mode: IOMode = field(default_factory=IOMode.standard)
    output_mode: IOMode = field(default_factory=IOMode.standard)
    provenance: object | None = None

    @property
    def is_empty(self) -> bool:
        return not self.cases

    def sorted_case_names(self) -> list[str]:
        return sort_case_names(self.cases)

    def iter_cases(self) -> Iterator[tuple[str, StoredCase]]:
        """Yield `(name, case)` pairs in run order."""
        for name in self.sorted_case_names():
            yield name, self.cases[name]

    def select_cases(self, case_names: Iterable[str] | None) -> StoredTest:
        """Return a copy restricted to `case_names`; None keeps every case."""
        if case_names is None:
            return self
        selected: dict[str, StoredCase] = {}
        for name in case_names:
            if name not in self.cases:
                raise CaseNotFound(name)
            selected[name] = self.cases[name]
        return StoredTest(
            cases=selected,
            input_extension=self.input_extension,
            output_extension=self.output_extension,
            input_mode=self.input_mode,
            output_mode=self.output_mode,
            provenance=self.provenance,
        )

    def input_path(self, working_dir: Path) -> Path | None:
        return self.input_mode.resolve_in(working_dir, self.input_extension)

    def output_path(self, working_dir: Path) -> Path | None:
        return self.output_mode.resolve_in(working_dir, self.output_extension)

    def describe_io(self) -> tuple[str, str]:
        """Return human-readable input and output routing."""
        return (
            self.input_mode.file_name(self.input_extension) or "stdin",
            self.output_mode.file_name(self.output_extension) or "stdout",
        )
