"""Configuration domain entities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

SUPPORTED_CPP_VERSIONS = ("20", "17", "14", "11")
DEFAULT_CPP_VERSION = "17"
DEFAULT_TIMEOUT_MS = 5000
COMPARISON_MODES = ("trimmed", "exact", "tokens")
DEFAULT_COMPARISON_MODE = "trimmed"


@dataclass(frozen=True)
class ToolchainSetting:
    """Executable name and command-line flags for one external tool."""

    executable: str
    flags: Mapping[str, str | None] = field(default_factory=dict)

    def rendered_flags(self) -> tuple[str, ...]:
        """Render flags as `flag` or `flag=value`, keeping configured order."""
        return tuple(flag if not value else f"{flag}={value}" for flag, value in self.flags.items())

    def command_prefix(self) -> tuple[str, ...]:
        """Return the executable followed by its rendered flags."""
        return (self.executable, *self.rendered_flags())


def _default_native_flags() -> dict[str, str | None]:
    return {"-O2": None, "-lm": None}


@dataclass(frozen=True)
class ToolchainSettings:
    """Per-tool settings for every supported language."""

    gcc: ToolchainSetting = field(
        default_factory=lambda: ToolchainSetting("gcc", _default_native_flags())
    )
    gpp: ToolchainSetting = field(
        default_factory=lambda: ToolchainSetting("g++", _default_native_flags())
    )
    javac: ToolchainSetting = field(default_factory=lambda: ToolchainSetting("javac"))
    java: ToolchainSetting = field(default_factory=lambda: ToolchainSetting("java"))
    python: ToolchainSetting = field(default_factory=lambda: ToolchainSetting("python3"))


@dataclass(frozen=True)
class HarnessSettings:
    """Top-level configuration aggregate resolved once per invocation."""

    path: Path | None = None
    default_cpp_version: str = DEFAULT_CPP_VERSION
    default_timeout_ms: int = DEFAULT_TIMEOUT_MS
    unicode_output: bool = False
    comparison_mode: str = DEFAULT_COMPARISON_MODE
    toolchains: ToolchainSettings = field(default_factory=ToolchainSettings)

    def describe(self) -> str:
        """Render the settings the way `show-config` prints them."""
        lines = [
            f"Configuration file: {self.path if self.path else '(built-in defaults)'}",
            f"Default C++ version: {self.default_cpp_version}",
            f"Unicode output: {str(self.unicode_output).lower()}",
            f"Default time limit: {self.default_timeout_ms} ms",
            f"Comparison mode: {self.comparison_mode}",
        ]
        for label, setting in (
            ("GCC", self.toolchains.gcc),
            ("G++", self.toolchains.gpp),
            ("Javac", self.toolchains.javac),
            ("Java", self.toolchains.java),
            ("Python", self.toolchains.python),
        ):
            flags = ", ".join(f'"{flag}"' for flag in setting.rendered_flags())
            lines.append(f"{label}: {setting.executable} (flags: {flags or 'none'})")
        return "\n".join(lines)
