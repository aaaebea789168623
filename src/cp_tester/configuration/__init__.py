"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import ConfigurationError, load_configuration, resolve_configuration
from .runtime_settings import (
    COMPARISON_MODES,
    SUPPORTED_CPP_VERSIONS,
    HarnessSettings,
    ToolchainSetting,
    ToolchainSettings,
)

__all__ = [
    "HarnessSettings",
    "ToolchainSetting",
    "ToolchainSettings",
    "COMPARISON_MODES",
    "SUPPORTED_CPP_VERSIONS",
    "ConfigurationError",
    "load_configuration",
    "resolve_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
