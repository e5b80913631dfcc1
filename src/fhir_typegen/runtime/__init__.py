"""Runtime support imported by generated modules."""

from . import primitives

__all__ = ["primitives"]
