"""Output writing exports."""

from .module_formatting import ModuleFormattingError, format_module
from .module_writer import ModuleWriteError, WriteFailure, write_modules

__all__ = [
    "ModuleFormattingError",
    "ModuleWriteError",
    "WriteFailure",
    "format_module",
    "write_modules",
]
