"""Schema definition loading and parsing service."""

from __future__ import annotations

import json
import keyword
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from .definition_models import Field, SchemaDefinition

logger = logging.getLogger(__name__)

UNBOUNDED = "*"


class DefinitionError(Exception):
    """Raised when a schema definition document cannot be read or parsed."""


def read_definition_documents(pattern: str, *, base_dir: Path | str) -> list[SchemaDefinition]:
    """Read every definition document matching a glob pattern, in sorted path order."""
    base = Path(base_dir)
    if Path(pattern).is_absolute():
        anchor = Path(Path(pattern).anchor)
        matches = sorted(anchor.glob(str(Path(pattern).relative_to(anchor))))
    else:
        matches = sorted(base.glob(pattern))
    files = [match for match in matches if match.is_file()]
    if not files:
        raise DefinitionError(f"No schema definition files match: {pattern}")

    definitions = []
    for path in files:
        logger.debug("Reading schema definition %s", path)
        definitions.append(load_definition_file(path))
    return definitions


def load_definition_file(path: Path | str) -> SchemaDefinition:
    """Load one JSON definition document from disk."""
    source = Path(path)
    try:
        document = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DefinitionError(f"Invalid schema definition JSON in {source}: {exc}") from exc
    except OSError as exc:
        raise DefinitionError(f"Cannot read schema definition {source}: {exc}") from exc
    try:
        return parse_definition(document)
    except DefinitionError as exc:
        raise DefinitionError(f"{source}: {exc}") from exc


def parse_definition(document: Any) -> SchemaDefinition:
    """Convert a StructureDefinition-shaped mapping into a SchemaDefinition."""
    if not isinstance(document, Mapping):
        raise DefinitionError("Schema definition root must be an object.")

    name = _require_identifier(document.get("name"), "name")
    base_type = document.get("type", name)
    base_type = _require_identifier(base_type, "type")
    description = document.get("description") or ""
    if not isinstance(description, str):
        raise DefinitionError(f"{name}: description must be a string.")

    snapshot = document.get("snapshot")
    if not isinstance(snapshot, Mapping):
        raise DefinitionError(f"{name}: snapshot is required.")
    elements = snapshot.get("element") or []
    if not isinstance(elements, Sequence) or isinstance(elements, str):
        raise DefinitionError(f"{name}: snapshot.element must be a list.")

    fields = tuple(_parse_element(name, element) for element in elements)
    return SchemaDefinition(
        name=name,
        base_type=base_type,
        fields=fields,
        description=description.strip(),
    )


def _parse_element(definition_name: str, element: Any) -> Field:
    if not isinstance(element, Mapping):
        raise DefinitionError(f"{definition_name}: snapshot elements must be objects.")
    path = element.get("path")
    if not isinstance(path, str) or not path.strip():
        raise DefinitionError(f"{definition_name}: element path must be a non-empty string.")
    path = path.strip()

    return Field(
        path=path,
        min_occurs=_parse_min(definition_name, path, element.get("min", 0)),
        max_occurs=_parse_max(definition_name, path, element.get("max", "1")),
        declared_types=_parse_type_codes(definition_name, path, element.get("type")),
        description=_element_description(element),
        content_reference=_optional_string(element.get("contentReference")),
    )


def _parse_min(definition_name: str, path: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise DefinitionError(f"{definition_name}: {path} min must be a non-negative integer.")
    return value


def _parse_max(definition_name: str, path: str, value: Any) -> int | None:
    if value == UNBOUNDED:
        return None
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    raise DefinitionError(f"{definition_name}: {path} max must be '*' or a non-negative integer.")


def _parse_type_codes(definition_name: str, path: str, value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise DefinitionError(f"{definition_name}: {path} type must be a list.")
    codes: list[str] = []
    for entry in value:
        code = entry.get("code") if isinstance(entry, Mapping) else None
        if not isinstance(code, str) or not code.strip():
            raise DefinitionError(f"{definition_name}: {path} type entries require a code.")
        if code.strip() not in codes:
            codes.append(code.strip())
    return tuple(codes)


def _element_description(element: Mapping[str, Any]) -> str:
    for key in ("short", "definition"):
        value = element.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _optional_string(value: Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _require_identifier(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise DefinitionError(f"Schema definition {field_name} must be a non-empty string.")
    stripped = value.strip()
    if not stripped.isidentifier() or keyword.iskeyword(stripped):
        raise DefinitionError(f"Schema definition {field_name} is not an identifier: {stripped}")
    return stripped
