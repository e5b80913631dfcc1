"""Type graph entities derived from a schema definition."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from fhir_typegen.definition_ingestion.definition_models import Field


class TypeRefKind(str, Enum):
    """Shape of a resolved type expression."""

    PRIMITIVE = "primitive"
    EXTERNAL = "external"
    INLINE_ARRAY = "inline-array"
    POLYMORPHIC_UNION = "polymorphic-union"


class EmissionForm(str, Enum):
    """How a Group's validator binding is emitted."""

    EAGER = "eager"
    DEFERRED = "deferred"


@dataclass(frozen=True)
class Group:
    """Nested structure made of the direct children of one path."""

    name: str
    source_path: str
    members: tuple[Field, ...]
    is_root: bool = False
    description: str = ""


@dataclass(frozen=True)
class TypeRef:
    """Resolved generated-type expression for one field."""

    kind: TypeRefKind
    target: str | None = None
    members: tuple[TypeRef, ...] = field(default_factory=tuple)
    same_module: bool = False

    @staticmethod
    def primitive(name: str) -> TypeRef:
        return TypeRef(kind=TypeRefKind.PRIMITIVE, target=name)

    @staticmethod
    def external(name: str, *, same_module: bool = False) -> TypeRef:
        return TypeRef(kind=TypeRefKind.EXTERNAL, target=name, same_module=same_module)

    @staticmethod
    def array_of(item: TypeRef) -> TypeRef:
        return TypeRef(kind=TypeRefKind.INLINE_ARRAY, members=(item,))

    @staticmethod
    def union_of(options: tuple[TypeRef, ...]) -> TypeRef:
        return TypeRef(kind=TypeRefKind.POLYMORPHIC_UNION, members=options)

    def walk(self) -> Iterator[TypeRef]:
        """Yield this reference and every nested reference, depth first."""
        pending = [self]
        while pending:
            current = pending.pop()
            yield current
            pending.extend(reversed(current.members))

    def cross_module_targets(self) -> set[str]:
        return {
            ref.target
            for ref in self.walk()
            if ref.kind == TypeRefKind.EXTERNAL and not ref.same_module and ref.target
        }

    def same_module_targets(self) -> set[str]:
        return {
            ref.target
            for ref in self.walk()
            if ref.kind == TypeRefKind.EXTERNAL and ref.same_module and ref.target
        }
