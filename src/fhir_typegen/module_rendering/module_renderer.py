"""Module source rendering for schema definitions."""

from __future__ import annotations

import json
from collections.abc import Collection, Sequence

from fhir_typegen.configuration.runtime_settings import GenerationOptions
from fhir_typegen.definition_ingestion.definition_models import SchemaDefinition
from fhir_typegen.type_graph import (
    DefinitionAnalysis,
    EmissionForm,
    GroupPlan,
    ResolvedProperty,
    analyze_definition,
)

from .module_models import BARREL_MODULE_NAME, Module
from .type_expressions import PRIMITIVES_NAME, annotation, validator_name

_INDENT = "    "
_DEFERRED_BUILD = "@with_config(ConfigDict(defer_build=True))"


def render_module(
    definition: SchemaDefinition,
    options: GenerationOptions,
    *,
    known_definitions: Collection[str] = (),
) -> Module:
    """Render one definition into module source text.

    Analysis runs to completion before any text is produced, so a type graph
    error aborts the whole definition. `known_definitions` names every
    definition generated alongside this one.
    """
    analysis = analyze_definition(definition, known_definitions=known_definitions)
    return Module(name=definition.name, text=render_analysis(analysis, options))


def render_analysis(analysis: DefinitionAnalysis, options: GenerationOptions) -> str:
    sections = [
        _render_header(analysis.definition.name),
        _render_runtime_imports(options.runtime_package),
    ]
    if analysis.imports and not options.source_only_mode:
        sections.append(_render_cross_module_imports(analysis.imports))
    type_blocks = "\n\n\n".join(_render_group(plan) for plan in analysis.groups)
    return "\n\n".join(sections) + "\n\n\n" + type_blocks + "\n"


def render_barrel(definitions: Sequence[SchemaDefinition]) -> Module:
    """Re-export every definition's shape and validator, in input order."""
    lines = [
        f"from .{definition.name} import {definition.name}, {validator_name(definition.name)}"
        for definition in definitions
    ]
    return Module(name=BARREL_MODULE_NAME, text="\n".join(lines) + "\n")


def _render_header(name: str) -> str:
    return f'"""\n{name} Module\n"""'


def _render_runtime_imports(runtime_package: str) -> str:
    return "\n".join(
        (
            "from pydantic import ConfigDict, TypeAdapter, with_config",
            "from typing_extensions import TypedDict",
            "",
            f"from {runtime_package} import {PRIMITIVES_NAME}",
        )
    )


def _render_cross_module_imports(names: Sequence[str]) -> str:
    return "\n".join(f"from .{name} import {name}, {validator_name(name)}" for name in names)


def _render_group(plan: GroupPlan) -> str:
    name = plan.group.name
    required_name = f"_{name}Required"
    optional_name = f"_{name}Optional"
    blocks = [
        _render_typed_dict(required_name, plan.required, total=True),
        _render_typed_dict(optional_name, plan.optional, total=False),
        "",
        "",
    ]
    if plan.emission_form == EmissionForm.DEFERRED:
        blocks.append(_DEFERRED_BUILD)
    blocks.extend(
        (
            f"class {name}({required_name}, {optional_name}):",
            _render_docstring(plan.group.description or name, indent=_INDENT),
            "",
            "",
            f"{validator_name(name)} = TypeAdapter({name})",
        )
    )
    return "\n".join(blocks)


def _render_typed_dict(
    name: str, properties: Sequence[ResolvedProperty], *, total: bool
) -> str:
    lines = [f"{name} = TypedDict(", f'{_INDENT}"{name}",']
    if properties:
        lines.append(f"{_INDENT}{{")
        for prop in properties:
            lines.extend(_property_comment(prop, indent=_INDENT * 2))
            lines.append(
                f"{_INDENT * 2}{_string_literal(prop.name)}: "
                f"{_string_literal(annotation(prop.type_ref))},"
            )
        lines.append(f"{_INDENT}}},")
    else:
        lines.append(f"{_INDENT}{{}},")
    if not total:
        lines.append(f"{_INDENT}total=False,")
    lines.append(")")
    return "\n".join(lines)


def _property_comment(prop: ResolvedProperty, *, indent: str) -> list[str]:
    text = " ".join(prop.field.description.split())
    return [f"{indent}# {text}"] if text else []


def _render_docstring(text: str, *, indent: str) -> str:
    escaped = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    body = "\n".join(
        f"{indent}{line.rstrip()}" if line.strip() else "" for line in escaped.splitlines()
    )
    return f'{indent}"""\n{body}\n{indent}"""'


def _string_literal(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)
