"""Configuration loader service."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from .runtime_settings import Configuration, GenerationOptions


class ConfigurationError(Exception):
    """Raised when the configuration file is invalid."""


class UnsupportedConfigurationError(ConfigurationError):
    """Raised when a requested option has no implementation."""


def default_configuration(base_dir: Path | str | None = None) -> Configuration:
    """Configuration used when no file is given: defaults rooted at base_dir."""
    return Configuration(path=None, base_dir=Path(base_dir or Path.cwd()).resolve())


def ensure_supported_options(options: GenerationOptions) -> None:
    """Reject options that are recognized but not implemented."""
    if options.use_full_schema_history:
        raise UnsupportedConfigurationError(
            "generation.use_full_schema_history is not supported: "
            "fields can only be derived from the snapshot representation."
        )


def load_configuration(config_path: Path | str) -> Configuration:
    """Load and validate the configuration file."""
    path = Path(config_path)
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:  # pragma: no cover - exercised indirectly
        raise ConfigurationError(f"Failed to parse configuration file: {exc}") from exc

    if parsed is None:
        parsed = {}

    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Configuration root must be a mapping.")

    base_dir = path.resolve().parent
    input_pattern = _optional_string(parsed.get("input"), "input")
    output_dir_value = _optional_string(parsed.get("output_dir"), "output_dir")
    output_dir = _resolve_path(base_dir, output_dir_value) if output_dir_value else None
    options = _parse_options(parsed.get("generation"), parsed.get("output"))

    return Configuration(
        path=path.resolve(),
        base_dir=base_dir,
        input_pattern=input_pattern,
        output_dir=output_dir,
        options=options,
    )


def _parse_options(generation: Any, output: Any) -> GenerationOptions:
    generation_section = _optional_mapping(generation, "generation")
    output_section = _optional_mapping(output, "output")
    defaults = GenerationOptions()
    runtime_package = _require_non_empty_string(
        generation_section.get("runtime_package", defaults.runtime_package),
        "generation.runtime_package",
    )
    if not all(part.isidentifier() for part in runtime_package.split(".")):
        raise ConfigurationError(
            f"generation.runtime_package must be a dotted module path: {runtime_package}"
        )
    return GenerationOptions(
        aggregate_exports=_require_bool(
            generation_section.get("aggregate_exports", defaults.aggregate_exports),
            "generation.aggregate_exports",
        ),
        source_only_mode=_require_bool(
            generation_section.get("source_only_mode", defaults.source_only_mode),
            "generation.source_only_mode",
        ),
        use_full_schema_history=_require_bool(
            generation_section.get("use_full_schema_history", defaults.use_full_schema_history),
            "generation.use_full_schema_history",
        ),
        skip_failed_definitions=_require_bool(
            generation_section.get("skip_failed_definitions", defaults.skip_failed_definitions),
            "generation.skip_failed_definitions",
        ),
        format_output=_require_bool(
            output_section.get("format", defaults.format_output), "output.format"
        ),
        write_parallelism=_require_positive_int(
            output_section.get("parallelism", defaults.write_parallelism), "output.parallelism"
        ),
        runtime_package=runtime_package,
    )


def _resolve_path(base_path: Path, raw_path: str) -> Path:
    candidate = Path(raw_path)
    if not candidate.is_absolute():
        return (base_path / candidate).resolve()
    return candidate


def _optional_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if value is None:
        return {}
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


def _optional_string(value: Any, field_name: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigurationError(f"{field_name} must be a string.")
    stripped = value.strip()
    return stripped or None


def _require_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be true or false.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
