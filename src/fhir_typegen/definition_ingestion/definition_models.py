"""Schema definition entities."""

from __future__ import annotations

from dataclasses import dataclass

POLYMORPHIC_MARKER = "[x]"


@dataclass(frozen=True)
class Field:
    """One path-addressed element of a schema definition."""

    path: str
    min_occurs: int
    max_occurs: int | None
    declared_types: tuple[str, ...]
    description: str = ""
    content_reference: str | None = None

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.path.split("."))

    @property
    def parent_path(self) -> str | None:
        head, separator, _ = self.path.rpartition(".")
        return head if separator else None

    @property
    def is_repeated(self) -> bool:
        return self.max_occurs is None or self.max_occurs > 1

    @property
    def property_name(self) -> str:
        """Generated property name: last segment without the polymorphic marker."""
        return self.segments[-1].removesuffix(POLYMORPHIC_MARKER)


@dataclass(frozen=True)
class SchemaDefinition:
    """Parsed schema document describing one named resource or data type."""

    name: str
    base_type: str
    fields: tuple[Field, ...]
    description: str = ""

    @property
    def root_path(self) -> str:
        return self.base_type
