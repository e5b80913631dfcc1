"""Recursion analyzer tests."""

from __future__ import annotations

from fhir_typegen.definition_ingestion.definition_models import Field, SchemaDefinition
from fhir_typegen.type_graph.definition_analysis import analyze_definition
from fhir_typegen.type_graph.graph_models import EmissionForm
from fhir_typegen.type_graph.group_builder import build_groups
from fhir_typegen.type_graph.recursion_analyzer import is_recursive, select_emission_forms


def _field(path: str, *types: str, content_reference: str | None = None) -> Field:
    return Field(
        path=path,
        min_occurs=0,
        max_occurs=None,
        declared_types=types,
        content_reference=content_reference,
    )


def _recursion_by_group(name: str, *fields: Field) -> dict[str, bool]:
    analysis = analyze_definition(SchemaDefinition(name=name, base_type=name, fields=fields))
    return {plan.group.name: plan.recursive for plan in analysis.groups}


def test_mutually_referencing_backbone_groups_are_both_recursive() -> None:
    recursion = _recursion_by_group(
        "Graph",
        _field("Graph.a", "BackboneElement"),
        _field("Graph.a.next", "B"),
        _field("Graph.b", "BackboneElement"),
        _field("Graph.b.prev", "A"),
    )

    assert recursion == {"Graph": False, "A": True, "B": True}


def test_direct_self_reference_marks_root_recursive() -> None:
    recursion = _recursion_by_group(
        "Extension",
        _field("Extension.url", "uri"),
        _field("Extension.extension", "Extension"),
    )

    assert recursion == {"Extension": True}


def test_content_reference_cycle_marks_nested_group_recursive() -> None:
    recursion = _recursion_by_group(
        "Questionnaire",
        _field("Questionnaire.item", "BackboneElement"),
        _field("Questionnaire.item.linkId", "string"),
        _field("Questionnaire.item.item", content_reference="#Questionnaire.item"),
    )

    assert recursion == {"Questionnaire": False, "Item": True}


def test_definition_without_self_reference_has_no_recursive_group() -> None:
    recursion = _recursion_by_group(
        "Patient",
        _field("Patient.name", "HumanName"),
        _field("Patient.contact", "BackboneElement"),
        _field("Patient.contact.name", "HumanName"),
    )

    assert recursion == {"Patient": False, "Contact": False}


def test_cross_module_references_never_count_as_recursion() -> None:
    recursion = _recursion_by_group(
        "Reference",
        _field("Reference.identifier", "Identifier"),
        _field("Reference.display", "string"),
    )

    assert recursion == {"Reference": False}


def test_is_recursive_follows_transitive_references_only_back_to_the_start() -> None:
    references = {
        "A": frozenset({"B"}),
        "B": frozenset({"C"}),
        "C": frozenset({"B"}),
        "D": frozenset({"D"}),
    }

    assert is_recursive("A", references) is False
    assert is_recursive("B", references) is True
    assert is_recursive("C", references) is True
    assert is_recursive("D", references) is True


def test_forward_references_are_deferred_and_leaves_are_eager() -> None:
    groups = build_groups(
        "Patient",
        [
            _field("Patient.contact", "BackboneElement"),
            _field("Patient.contact.name", "HumanName"),
        ],
    )
    references = {"Patient": frozenset({"Contact"}), "Contact": frozenset()}

    forms = select_emission_forms(groups, references)

    assert forms == {"Patient": EmissionForm.DEFERRED, "Contact": EmissionForm.EAGER}


def test_backward_reference_between_non_recursive_groups_stays_eager() -> None:
    groups = build_groups(
        "Foo",
        [
            _field("Foo.a", "BackboneElement"),
            _field("Foo.a.x", "string"),
            _field("Foo.b", "BackboneElement"),
            _field("Foo.b.y", "A"),
        ],
    )
    references = {"Foo": frozenset({"A", "B"}), "A": frozenset(), "B": frozenset({"A"})}

    forms = select_emission_forms(groups, references)

    assert forms["B"] == EmissionForm.EAGER
    assert forms["A"] == EmissionForm.EAGER
    assert forms["Foo"] == EmissionForm.DEFERRED


def test_backward_reference_reaching_a_later_group_is_deferred() -> None:
    groups = build_groups(
        "Foo",
        [
            _field("Foo.a", "BackboneElement"),
            _field("Foo.a.c", "BackboneElement"),
            _field("Foo.a.c.z", "string"),
            _field("Foo.b", "BackboneElement"),
            _field("Foo.b.y", "A"),
        ],
    )
    references = {
        "Foo": frozenset({"A", "B"}),
        "A": frozenset({"AC"}),
        "B": frozenset({"A"}),
        "AC": frozenset(),
    }

    forms = select_emission_forms(groups, references)

    assert [group.name for group in groups] == ["Foo", "A", "B", "AC"]
    assert forms == {
        "Foo": EmissionForm.DEFERRED,
        "A": EmissionForm.DEFERRED,
        "B": EmissionForm.DEFERRED,
        "AC": EmissionForm.EAGER,
    }
