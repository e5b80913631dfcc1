"""Type graph exports."""

from .cardinality import partition_members
from .definition_analysis import (
    DefinitionAnalysis,
    GroupPlan,
    ResolvedProperty,
    analyze_definition,
)
from .graph_errors import StructuralInputError, TypeGraphError, UnresolvableTypeError
from .graph_models import EmissionForm, Group, TypeRef, TypeRefKind
from .group_builder import build_definition_groups, build_groups, group_name_for_path
from .import_resolver import resolve_imports
from .recursion_analyzer import (
    group_references,
    is_recursive,
    reachable_groups,
    select_emission_forms,
)
from .type_resolver import PRIMITIVE_TYPES, TypeResolver, primitive_name

__all__ = [
    "PRIMITIVE_TYPES",
    "DefinitionAnalysis",
    "EmissionForm",
    "Group",
    "GroupPlan",
    "ResolvedProperty",
    "StructuralInputError",
    "TypeGraphError",
    "TypeRef",
    "TypeRefKind",
    "TypeResolver",
    "UnresolvableTypeError",
    "analyze_definition",
    "build_definition_groups",
    "build_groups",
    "group_name_for_path",
    "group_references",
    "is_recursive",
    "partition_members",
    "primitive_name",
    "reachable_groups",
    "resolve_imports",
    "select_emission_forms",
]
