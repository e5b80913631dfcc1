"""Per-definition type graph assembly consumed by the module renderer."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from fhir_typegen.definition_ingestion.definition_models import Field, SchemaDefinition

from .cardinality import partition_members
from .graph_errors import StructuralInputError
from .graph_models import EmissionForm, Group, TypeRef
from .group_builder import build_definition_groups
from .import_resolver import resolve_imports
from .recursion_analyzer import group_references, is_recursive, select_emission_forms
from .type_resolver import TypeResolver


@dataclass(frozen=True)
class ResolvedProperty:
    """A Group member together with its resolved type."""

    field: Field
    type_ref: TypeRef

    @property
    def name(self) -> str:
        return self.field.property_name


@dataclass(frozen=True)
class GroupPlan:
    """Everything needed to emit one Group's type block."""

    group: Group
    required: tuple[ResolvedProperty, ...]
    optional: tuple[ResolvedProperty, ...]
    recursive: bool
    emission_form: EmissionForm


@dataclass(frozen=True)
class DefinitionAnalysis:
    """Ordered Group plans plus the cross-module imports of one definition."""

    definition: SchemaDefinition
    groups: tuple[GroupPlan, ...]
    imports: tuple[str, ...]


def analyze_definition(
    definition: SchemaDefinition, *, known_definitions: Collection[str] = ()
) -> DefinitionAnalysis:
    """Build Groups, resolve every member and run recursion analysis for one definition.

    Raises:
      StructuralInputError: If the field paths do not form a consistent tree, or a
        nested Group would shadow an imported definition of the same name.
      UnresolvableTypeError: If any field cannot be resolved to a type.
    """
    groups = build_definition_groups(definition)
    resolver = TypeResolver(definition, groups, known_definitions=known_definitions)
    resolved = {
        group.name: tuple(
            ResolvedProperty(field=field, type_ref=resolver.resolve(field))
            for field in group.members
        )
        for group in groups
    }
    references = group_references(
        {name: [prop.type_ref for prop in props] for name, props in resolved.items()}
    )
    forms = select_emission_forms(groups, references)

    plans = []
    for group in groups:
        by_path = {prop.field.path: prop for prop in resolved[group.name]}
        required, optional = partition_members(group.members)
        plans.append(
            GroupPlan(
                group=group,
                required=tuple(by_path[field.path] for field in required),
                optional=tuple(by_path[field.path] for field in optional),
                recursive=is_recursive(group.name, references),
                emission_form=forms[group.name],
            )
        )

    imports = resolve_imports(
        definition.name,
        (prop.type_ref for props in resolved.values() for prop in props),
    )
    _ensure_no_shadowed_imports(definition, groups, imports)
    return DefinitionAnalysis(definition=definition, groups=tuple(plans), imports=tuple(imports))


def _ensure_no_shadowed_imports(
    definition: SchemaDefinition, groups: list[Group], imports: list[str]
) -> None:
    imported = set(imports)
    for group in groups:
        if group.name in imported:
            raise StructuralInputError(
                f"nested group '{group.name}' collides with the imported definition "
                f"{group.name}",
                definition_name=definition.name,
                path=group.source_path,
            )
