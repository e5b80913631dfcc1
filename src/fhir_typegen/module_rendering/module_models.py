"""Rendered module entities."""

from __future__ import annotations

from dataclasses import dataclass

BARREL_MODULE_NAME = "__init__"


@dataclass(frozen=True)
class Module:
    """Generated source text for one output module."""

    name: str
    text: str

    @property
    def filename(self) -> str:
        return f"{self.name}.py"
