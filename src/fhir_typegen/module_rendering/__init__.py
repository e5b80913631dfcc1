"""Module rendering exports."""

from .module_models import BARREL_MODULE_NAME, Module
from .module_renderer import render_analysis, render_barrel, render_module
from .type_expressions import annotation, validator_name

__all__ = [
    "BARREL_MODULE_NAME",
    "Module",
    "annotation",
    "render_analysis",
    "render_barrel",
    "render_module",
    "validator_name",
]
