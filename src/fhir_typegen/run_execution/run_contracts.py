"""Run execution entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fhir_typegen.module_rendering.module_models import Module


@dataclass(frozen=True)
class GenerationRequest:  # pylint: disable=too-many-instance-attributes
    """Input contract for one generation run; None leaves the configured value."""

    config_path: str | None = None
    input_pattern: str | None = None
    output_dir: str | None = None
    aggregate_exports: bool | None = None
    source_only_mode: bool | None = None
    format_output: bool | None = None
    skip_failed_definitions: bool | None = None
    use_full_schema_history: bool | None = None


@dataclass(frozen=True)
class SkippedDefinition:
    """Definition left out of the output because its types could not be resolved."""

    name: str
    reason: str


@dataclass(frozen=True)
class GeneratedModules:
    """Modules rendered for a run, before formatting and writing."""

    modules: tuple[Module, ...]
    skipped: tuple[SkippedDefinition, ...] = ()


@dataclass(frozen=True)
class RunOutcome:
    """Output contract for one completed run."""

    output_dir: Path
    written_paths: tuple[Path, ...]
    skipped: tuple[SkippedDefinition, ...]

    @property
    def module_count(self) -> int:
        return len(self.written_paths)
