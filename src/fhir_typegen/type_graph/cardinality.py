"""Required/optional partition of Group members."""

from __future__ import annotations

from collections.abc import Iterable

from fhir_typegen.definition_ingestion.definition_models import Field


def partition_members(members: Iterable[Field]) -> tuple[list[Field], list[Field]]:
    """Split fields into required (min > 0) and optional, sorted by property name."""
    required: list[Field] = []
    optional: list[Field] = []
    for field in members:
        (required if field.min_occurs > 0 else optional).append(field)
    return _by_property_name(required), _by_property_name(optional)


def _by_property_name(fields: list[Field]) -> list[Field]:
    return sorted(fields, key=lambda field: field.property_name)
