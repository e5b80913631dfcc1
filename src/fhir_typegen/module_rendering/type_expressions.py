"""Rendering of TypeRefs as annotation expressions."""

from __future__ import annotations

from fhir_typegen.type_graph.graph_models import TypeRef, TypeRefKind

PRIMITIVES_NAME = "primitives"


def validator_name(type_name: str) -> str:
    return f"{type_name}Validator"


def annotation(type_ref: TypeRef) -> str:
    """Annotation text placed, as a forward reference, in generated TypedDict declarations.

    Primitives name the runtime aliases so that the validator enforces FHIR
    value constraints; composites name the generated TypedDict classes.
    """
    if type_ref.kind == TypeRefKind.PRIMITIVE:
        return f"{PRIMITIVES_NAME}.{type_ref.target}"
    if type_ref.kind == TypeRefKind.EXTERNAL:
        return type_ref.target or ""
    if type_ref.kind == TypeRefKind.INLINE_ARRAY:
        return f"list[{annotation(type_ref.members[0])}]"
    return " | ".join(annotation(member) for member in type_ref.members)
