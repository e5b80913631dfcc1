"""Type graph failures."""

from __future__ import annotations


class TypeGraphError(Exception):
    """Base error for type graph construction, carrying the offending location."""

    def __init__(self, message: str, *, definition_name: str, path: str | None = None) -> None:
        location = definition_name if path is None else f"{definition_name} ({path})"
        super().__init__(f"{location}: {message}")
        self.definition_name = definition_name
        self.path = path


class StructuralInputError(TypeGraphError):
    """Raised when field paths cannot be arranged into a consistent Group tree."""


class UnresolvableTypeError(TypeGraphError):
    """Raised when a field cannot be resolved to a generated type."""
