"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "cp-tester.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Configuration for cp-tester.
# Every key is optional; removing a key falls back to the built-in default shown here.

# C++ standard used when --cpp-ver is not given. One of 20, 17, 14, 11.
default_cpp_version: "17"

# Wall-clock limit per test case in milliseconds when --timeout is not given.
# 0 disables the limit.
default_timeout_ms: 5000

# Print unicode symbols instead of PASSED/FAILED.
unicode_output: false

# How program output is compared with the expected output:
#   trimmed - leading/trailing whitespace of the whole text is ignored
#   exact   - text must match verbatim
#   tokens  - whitespace-separated tokens must match
comparison_mode: trimmed

toolchains:
  # Each flag maps to an optional value and is passed as `flag` or `flag=value`.
  gcc:
    executable: gcc
    flags:
      "-O2":
      "-lm":
  gpp:
    executable: g++
    flags:
      "-O2":
      "-lm":
  javac:
    executable: javac
    flags: {}
  java:
    executable: java
    flags: {}
  python:
    executable: python3
    flags: {}
"""


def build_placeholder_configuration() -> str:
    """Build a YAML configuration scaffold holding the default settings and inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration scaffold to the requested output path.

    Args:
      output_path: Destination file path for the scaffold.

    Returns:
      The resolved destination path.

    Raises:
      FileExistsError: If the destination file already exists.
      OSError: If writing the scaffold fails.
    """
    destination = Path(output_path)
    if destination.exists():
        raise FileExistsError(f"Configuration file already exists: {destination.resolve()}")
    destination.write_text(build_placeholder_configuration(), encoding="utf-8")
    return destination.resolve()
