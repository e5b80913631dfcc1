"""Group reconstruction from flat dotted field paths."""

from __future__ import annotations

import keyword
from collections.abc import Iterable

from fhir_typegen.definition_ingestion.definition_models import (
    POLYMORPHIC_MARKER,
    Field,
    SchemaDefinition,
)

from .graph_errors import StructuralInputError
from .graph_models import Group


def build_definition_groups(definition: SchemaDefinition) -> list[Group]:
    """Build the ordered Groups of one schema definition."""
    return build_groups(
        definition.name,
        definition.fields,
        root_path=definition.root_path,
        description=definition.description,
    )


def build_groups(
    root_name: str,
    fields: Iterable[Field],
    *,
    root_path: str | None = None,
    description: str = "",
) -> list[Group]:
    """Return the root Group followed by nested Groups ordered by depth, then path.

    Every non-root field ends up in exactly one Group's members. The field whose
    path equals the root only documents the root Group.
    """
    root = root_path or root_name
    fields_by_path = _index_fields(root_name, root, fields)

    members_by_path: dict[str, list[Field]] = {root: []}
    for path, field in fields_by_path.items():
        if path == root:
            continue
        parent = field.parent_path
        if parent is None or (parent != root and parent not in fields_by_path):
            raise StructuralInputError(
                "field has no parent field or root to attach to",
                definition_name=root_name,
                path=path,
            )
        members_by_path.setdefault(parent, []).append(field)
    for path, members in members_by_path.items():
        _check_property_names(root_name, path, members)

    nested_paths = sorted(
        (path for path in members_by_path if path != root),
        key=lambda path: (path.count("."), path),
    )
    root_field = fields_by_path.get(root)
    names_by_path = _derive_names(root_name, root, nested_paths)

    groups = [
        Group(
            name=root_name,
            source_path=root,
            members=_ordered_members(members_by_path[root]),
            is_root=True,
            description=description or (root_field.description if root_field else ""),
        )
    ]
    for path in nested_paths:
        groups.append(
            Group(
                name=names_by_path[path],
                source_path=path,
                members=_ordered_members(members_by_path[path]),
                description=fields_by_path[path].description,
            )
        )
    return groups


def group_name_for_path(root_path: str, path: str) -> str:
    """Derive a Group identifier from a nested path by dropping the root segment."""
    segments = path.split(".")
    if segments[0] == root_path:
        segments = segments[1:]
    return "".join(_capitalize(segment.removesuffix(POLYMORPHIC_MARKER)) for segment in segments)


def _index_fields(root_name: str, root: str, fields: Iterable[Field]) -> dict[str, Field]:
    fields_by_path: dict[str, Field] = {}
    for field in fields:
        segments = field.segments
        if any(not segment for segment in segments):
            raise StructuralInputError(
                "field path has an empty segment", definition_name=root_name, path=field.path
            )
        if segments[0] != root:
            raise StructuralInputError(
                f"field path must start with root '{root}'",
                definition_name=root_name,
                path=field.path,
            )
        if field.path in fields_by_path:
            raise StructuralInputError(
                "duplicate field path", definition_name=root_name, path=field.path
            )
        fields_by_path[field.path] = field
    return fields_by_path


def _derive_names(root_name: str, root: str, nested_paths: list[str]) -> dict[str, str]:
    claimed: dict[str, str] = {root_name: root}
    names: dict[str, str] = {}
    for path in nested_paths:
        name = group_name_for_path(root, path)
        if not name.isidentifier() or keyword.iskeyword(name):
            raise StructuralInputError(
                f"derived group name '{name}' is not a usable class name",
                definition_name=root_name,
                path=path,
            )
        if name in claimed:
            raise StructuralInputError(
                f"derived group name '{name}' collides with {claimed[name]}",
                definition_name=root_name,
                path=path,
            )
        claimed[name] = path
        names[path] = name
    return names


def _check_property_names(root_name: str, group_path: str, members: list[Field]) -> None:
    seen: dict[str, str] = {}
    for field in members:
        if field.property_name in seen:
            raise StructuralInputError(
                f"property '{field.property_name}' of {group_path} is also derived from "
                f"{seen[field.property_name]}",
                definition_name=root_name,
                path=field.path,
            )
        seen[field.property_name] = field.path


def _ordered_members(members: list[Field]) -> tuple[Field, ...]:
    return tuple(sorted(members, key=lambda field: (field.property_name, field.path)))


def _capitalize(segment: str) -> str:
    return segment[:1].upper() + segment[1:]
