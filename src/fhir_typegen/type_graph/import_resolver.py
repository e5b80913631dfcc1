"""Cross-module reference collection."""

from __future__ import annotations

from collections.abc import Iterable

from .graph_models import TypeRef


def resolve_imports(definition_name: str, type_refs: Iterable[TypeRef]) -> list[str]:
    """Return sorted, distinct definition names a module must import, excluding itself."""
    names: set[str] = set()
    for type_ref in type_refs:
        names |= type_ref.cross_module_targets()
    names.discard(definition_name)
    return sorted(names)
