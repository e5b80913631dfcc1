"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

DEFAULT_RUNTIME_PACKAGE = "fhir_typegen.runtime"


@dataclass(frozen=True)
class GenerationOptions:  # pylint: disable=too-many-instance-attributes
    """Options that shape one generation run."""

    aggregate_exports: bool = True
    source_only_mode: bool = False
    use_full_schema_history: bool = False
    skip_failed_definitions: bool = False
    format_output: bool = True
    write_parallelism: int = 4
    runtime_package: str = DEFAULT_RUNTIME_PACKAGE


@dataclass(frozen=True)
class Configuration:
    """Top-level configuration aggregate."""

    path: Path | None
    base_dir: Path
    input_pattern: str | None = None
    output_dir: Path | None = None
    options: GenerationOptions = field(default_factory=GenerationOptions)
