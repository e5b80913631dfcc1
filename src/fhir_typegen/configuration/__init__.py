"""Configuration domain exports."""

from .config_scaffold_builder import (
    DEFAULT_CONFIG_FILENAME,
    build_placeholder_configuration,
    write_placeholder_configuration,
)
from .loader import (
    ConfigurationError,
    UnsupportedConfigurationError,
    default_configuration,
    ensure_supported_options,
    load_configuration,
)
from .runtime_settings import DEFAULT_RUNTIME_PACKAGE, Configuration, GenerationOptions

__all__ = [
    "Configuration",
    "GenerationOptions",
    "DEFAULT_RUNTIME_PACKAGE",
    "ConfigurationError",
    "UnsupportedConfigurationError",
    "ensure_supported_options",
    "default_configuration",
    "load_configuration",
    "DEFAULT_CONFIG_FILENAME",
    "build_placeholder_configuration",
    "write_placeholder_configuration",
]
