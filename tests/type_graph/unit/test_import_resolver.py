"""Import resolver tests."""

from __future__ import annotations

from fhir_typegen.type_graph.graph_models import TypeRef
from fhir_typegen.type_graph.import_resolver import resolve_imports


def test_imports_are_sorted_distinct_and_exclude_the_current_definition() -> None:
    type_refs = [
        TypeRef.external("Reference"),
        TypeRef.array_of(TypeRef.external("HumanName")),
        TypeRef.union_of((TypeRef.external("Reference"), TypeRef.external("CodeableConcept"))),
        TypeRef.external("Patient"),
    ]

    assert resolve_imports("Patient", type_refs) == ["CodeableConcept", "HumanName", "Reference"]


def test_same_module_and_primitive_references_never_produce_imports() -> None:
    type_refs = [
        TypeRef.primitive("string"),
        TypeRef.array_of(TypeRef.external("Contact", same_module=True)),
        TypeRef.union_of((TypeRef.primitive("boolean"), TypeRef.primitive("dateTime"))),
    ]

    assert resolve_imports("Patient", type_refs) == []
