"""Source formatting pass applied to generated modules before they are written."""

from __future__ import annotations

import ast
import shlex
import subprocess
import sys
from collections.abc import Callable

from fhir_typegen.module_rendering.module_models import Module

FormatterRunner = Callable[[tuple[str, ...], str], str]


class ModuleFormattingError(Exception):
    """Raised when generated source is malformed or the formatter rejects it."""


def format_module(module: Module, *, run_formatter: FormatterRunner | None = None) -> Module:
    """Return the module with its text passed through `ruff format`.

    The text is parsed first so that a rendering defect is reported against
    the module name rather than as formatter output.
    """
    try:
        ast.parse(module.text, filename=module.filename)
    except SyntaxError as exc:
        raise ModuleFormattingError(
            f"Generated module {module.name} is not valid Python "
            f"(line {exc.lineno}): {exc.msg}"
        ) from exc

    formatter = run_formatter or _run_ruff_format
    command = (sys.executable, "-m", "ruff", "format", "--stdin-filename", module.filename, "-")
    formatted = formatter(command, module.text)
    return Module(name=module.name, text=formatted)


def _run_ruff_format(command: tuple[str, ...], source: str) -> str:
    """Pipe source through the formatter and wrap subprocess errors."""
    try:
        completed = subprocess.run(
            list(command),
            input=source,
            capture_output=True,
            text=True,
            check=True,
        )
    except FileNotFoundError as exc:
        raise ModuleFormattingError(f"Formatter not found: {shlex.join(command)}") from exc
    except subprocess.CalledProcessError as exc:
        detail = (exc.stderr or "").strip()
        raise ModuleFormattingError(
            f"Formatter failed with exit code {exc.returncode}: {shlex.join(command)}"
            + (f"\n{detail}" if detail else "")
        ) from exc
    return completed.stdout
