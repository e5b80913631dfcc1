"""Definition analysis tests covering whole-definition scenarios."""

from __future__ import annotations

import pytest
from fhir_typegen.definition_ingestion.definition_models import Field, SchemaDefinition
from fhir_typegen.type_graph.definition_analysis import analyze_definition
from fhir_typegen.type_graph.graph_errors import StructuralInputError
from fhir_typegen.type_graph.graph_models import EmissionForm, TypeRef


def _field(path: str, *types: str, min_occurs: int = 0, max_occurs: int | None = 1) -> Field:
    return Field(path=path, min_occurs=min_occurs, max_occurs=max_occurs, declared_types=types)


def test_single_required_primitive_property() -> None:
    definition = SchemaDefinition(
        name="Foo",
        base_type="Foo",
        fields=(_field("Foo", "Foo"), _field("Foo.bar", "string", min_occurs=1)),
    )

    analysis = analyze_definition(definition)

    assert len(analysis.groups) == 1
    root = analysis.groups[0]
    assert root.group.name == "Foo"
    assert [(prop.name, prop.type_ref) for prop in root.required] == [
        ("bar", TypeRef.primitive("string"))
    ]
    assert root.optional == ()
    assert root.recursive is False
    assert root.emission_form == EmissionForm.EAGER
    assert analysis.imports == ()


def test_optional_polymorphic_property_is_a_union_named_without_marker() -> None:
    definition = SchemaDefinition(
        name="Foo",
        base_type="Foo",
        fields=(_field("Foo.value[x]", "string", "integer"),),
    )

    root = analyze_definition(definition).groups[0]

    assert root.required == ()
    assert [prop.name for prop in root.optional] == ["value"]
    assert root.optional[0].type_ref == TypeRef.union_of(
        (TypeRef.primitive("string"), TypeRef.primitive("integer"))
    )


def test_imports_cover_nested_groups() -> None:
    definition = SchemaDefinition(
        name="Patient",
        base_type="Patient",
        fields=(
            _field("Patient.contact", "BackboneElement", max_occurs=None),
            _field("Patient.contact.name", "HumanName"),
            _field("Patient.contact.organization", "Reference"),
            _field("Patient.managingOrganization", "Reference"),
        ),
    )

    analysis = analyze_definition(definition)

    assert analysis.imports == ("HumanName", "Reference")
    assert [plan.emission_form for plan in analysis.groups] == [
        EmissionForm.DEFERRED,
        EmissionForm.EAGER,
    ]


def test_nested_group_shadowing_an_imported_definition_is_fatal() -> None:
    definition = SchemaDefinition(
        name="Foo",
        base_type="Foo",
        fields=(
            _field("Foo.period", "BackboneElement"),
            _field("Foo.period.note", "string"),
            _field("Foo.when", "Period"),
        ),
    )

    with pytest.raises(
        StructuralInputError,
        match=r"Foo \(Foo\.period\): nested group 'Period' collides with the imported definition",
    ):
        analyze_definition(definition, known_definitions={"Foo", "Period"})


def test_group_name_without_a_matching_definition_stays_in_module() -> None:
    definition = SchemaDefinition(
        name="Foo",
        base_type="Foo",
        fields=(
            _field("Foo.period", "BackboneElement"),
            _field("Foo.period.note", "string"),
            _field("Foo.when", "Period"),
        ),
    )

    analysis = analyze_definition(definition, known_definitions={"Foo", "HumanName"})

    assert analysis.imports == ()
    assert analysis.groups[0].optional[1].type_ref == TypeRef.external("Period", same_module=True)
