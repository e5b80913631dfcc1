"""Configuration scaffold generation helpers."""

from __future__ import annotations

from pathlib import Path

DEFAULT_CONFIG_FILENAME = "fhir-typegen.yaml"

_CONFIG_SCAFFOLD_TEMPLATE = """# Generation configuration for fhir-typegen.
# Relative paths are resolved against the directory of this file.
# Command line options override the values below.

# Glob pattern matching StructureDefinition JSON documents.
input: "definitions/*.json"
# Directory receiving one <Name>.py module per definition.
output_dir: "generated"

generation:
  # Write an __init__.py re-exporting every generated definition.
  aggregate_exports: true
  # Omit imports between generated modules (single concatenated output).
  source_only_mode: false
  # Derive fields from the differential instead of the snapshot. Not supported yet.
  use_full_schema_history: false
  # Drop definitions with unresolvable field types instead of failing the run.
  skip_failed_definitions: false
  # Package that generated modules import FHIR primitive types from.
  runtime_package: "fhir_typegen.runtime"

output:
  # Run generated modules through `ruff format` before writing.
  format: true
  # Number of modules written concurrently.
  parallelism: 4
"""


def build_placeholder_configuration() -> str:
    """Build a YAML generation configuration template with inline guidance."""
    return _CONFIG_SCAFFOLD_TEMPLATE


def write_placeholder_configuration(output_path: Path | str) -> Path:
    """Write the configuration template to the requested output path.

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
