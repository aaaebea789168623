"""Configuration loader service."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .config_scaffold_builder import DEFAULT_CONFIG_FILENAME
from .runtime_settings import (
    COMPARISON_MODES,
    DEFAULT_COMPARISON_MODE,
    DEFAULT_CPP_VERSION,
    DEFAULT_TIMEOUT_MS,
    SUPPORTED_CPP_VERSIONS,
    HarnessSettings,
    ToolchainSetting,
    ToolchainSettings,
)

_LOGGER = logging.getLogger(__name__)

_TOOLCHAIN_KEYS = ("gcc", "gpp", "javac", "java", "python")


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


def resolve_configuration(
    config_path: Path | str | None = None, *, search_dir: Path | None = None
) -> HarnessSettings:
    """Resolve settings from an explicit file, the working-directory default, or built-ins."""
    if config_path is not None:
        return load_configuration(config_path)
    candidate = (search_dir or Path.cwd()) / DEFAULT_CONFIG_FILENAME
    if candidate.is_file():
        _LOGGER.debug("Using configuration file %s", candidate)
        return load_configuration(candidate)
    _LOGGER.debug("No configuration file found, using built-in defaults")
    return HarnessSettings()


def load_configuration(config_path: Path | str) -> HarnessSettings:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    cpp_version = _parse_cpp_version(parsed.get("default_cpp_version", DEFAULT_CPP_VERSION))
    timeout_ms = _require_non_negative_int(
        parsed.get("default_timeout_ms", DEFAULT_TIMEOUT_MS), "default_timeout_ms"
    )
    unicode_output = _require_bool(parsed.get("unicode_output", False), "unicode_output")
    comparison_mode = _parse_comparison_mode(
        parsed.get("comparison_mode", DEFAULT_COMPARISON_MODE)
    )
    toolchains = _parse_toolchains_section(parsed.get("toolchains"))

    return HarnessSettings(
        path=path.resolve(),
        default_cpp_version=cpp_version,
        default_timeout_ms=timeout_ms,
        unicode_output=unicode_output,
        comparison_mode=comparison_mode,
        toolchains=toolchains,
    )


def _parse_cpp_version(value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, int | str):
        raise ConfigurationError("default_cpp_version must be a string or integer.")
    version = str(value).strip()
    if version not in SUPPORTED_CPP_VERSIONS:
        supported = ", ".join(SUPPORTED_CPP_VERSIONS)
        raise ConfigurationError(f"default_cpp_version must be one of: {supported}.")
    return version


def _parse_comparison_mode(value: Any) -> str:
    mode = _require_non_empty_string(value, "comparison_mode").lower()
    if mode not in COMPARISON_MODES:
        raise ConfigurationError(f"comparison_mode must be one of: {', '.join(COMPARISON_MODES)}.")
    return mode


def _parse_toolchains_section(value: Any) -> ToolchainSettings:
    defaults = ToolchainSettings()
    if value is None:
        return defaults
    section = _require_mapping(value, "toolchains")
    unknown = sorted(set(section) - set(_TOOLCHAIN_KEYS))
    if unknown:
        raise ConfigurationError(f"Unknown toolchain entries: {', '.join(map(str, unknown))}.")
    parsed = {
        key: _parse_toolchain_setting(section.get(key), getattr(defaults, key), f"toolchains.{key}")
        for key in _TOOLCHAIN_KEYS
    }
    return ToolchainSettings(**parsed)


def _parse_toolchain_setting(
    value: Any, default: ToolchainSetting, section_name: str
) -> ToolchainSetting:
    if value is None:
        return default
    section = _require_mapping(value, section_name)
    executable = default.executable
    if "executable" in section:
        executable = _require_non_empty_string(
            section.get("executable"), f"{section_name}.executable"
        )
    flags = default.flags
    if "flags" in section:
        flags = _normalize_flags(section.get("flags"), f"{section_name}.flags")
    return ToolchainSetting(executable=executable, flags=flags)


def _normalize_flags(value: Any, field_name: str) -> dict[str, str | None]:
    if value is None:
        return {}
    if isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a mapping or list of flags.")
    if isinstance(value, list):
        return {_require_non_empty_string(item, field_name): None for item in value}
    mapping = _require_mapping(value, field_name)
    flags: dict[str, str | None] = {}
    for raw_flag, raw_value in mapping.items():
        flag = _require_non_empty_string(raw_flag, field_name)
        if raw_value is None or raw_value == "":
            flags[flag] = None
        elif isinstance(raw_value, bool) or not isinstance(raw_value, str | int | float):
            raise ConfigurationError(f"{field_name}['{flag}'] must be a scalar value.")
        else:
            flags[flag] = str(raw_value)
    return flags


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_non_empty_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    if not stripped:
        raise ConfigurationError(f"{field_name} must not be empty.")
    return stripped


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_non_negative_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value < 0:
        raise ConfigurationError(f"{field_name} must not be negative.")
    return value
