"""Generated package import tests over the bundled sample definitions."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

import pytest
from fhir_typegen.configuration.runtime_settings import GenerationOptions
from fhir_typegen.definition_ingestion import read_definition_documents
from fhir_typegen.output_writing import write_modules
from fhir_typegen.run_execution.generation_run_use_case import generate_modules
from pydantic import TypeAdapter, ValidationError

SAMPLES_DIR = Path(__file__).resolve().parents[3] / "samples" / "definitions"
PACKAGE_NAME = "generated_fhir_models"


def _is_valid(adapter: TypeAdapter, value: object) -> bool:
    try:
        adapter.validate_python(value)
    except ValidationError:
        return False
    return True


@pytest.fixture
def generated_package(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    definitions = read_definition_documents("*.json", base_dir=SAMPLES_DIR)
    generated = generate_modules(definitions, GenerationOptions())
    write_modules(generated.modules, tmp_path / PACKAGE_NAME)
    monkeypatch.syspath_prepend(str(tmp_path))
    importlib.invalidate_caches()
    yield importlib.import_module(PACKAGE_NAME)
    for name in [name for name in sys.modules if name.split(".")[0] == PACKAGE_NAME]:
        del sys.modules[name]


def test_barrel_exposes_every_sample_definition(generated_package) -> None:
    for name in ("Extension", "HumanName", "Patient", "Questionnaire"):
        assert hasattr(generated_package, name)
        assert hasattr(generated_package, f"{name}Validator")


def test_patient_validator_follows_cross_module_reference(generated_package) -> None:
    validator = generated_package.PatientValidator
    patient = {
        "active": True,
        "gender": "female",
        "name": [{"family": "Chalmers", "given": ["Peter", "James"]}],
        "deceased": "2015-02-14T13:42:00+10:00",
        "contact": [{"name": {"family": "du Marché"}, "gender": "female"}],
    }

    assert _is_valid(validator, patient)
    assert not _is_valid(validator, {"gender": "male", "name": [{"given": "Peter"}]})
    assert not _is_valid(validator, {"gender": "male", "contact": [{"name": {"family": 7}}]})
    assert not _is_valid(validator, {"active": True})


def test_questionnaire_items_nest_through_content_reference(generated_package) -> None:
    validator = generated_package.QuestionnaireValidator
    questionnaire = {
        "status": "active",
        "item": [
            {
                "linkId": "1",
                "type": "group",
                "item": [{"linkId": "1.1", "type": "integer", "answerOption": [{"value": 3}]}],
            }
        ],
    }

    assert _is_valid(validator, questionnaire)
    assert not _is_valid(validator, {"status": "active", "item": [{"type": "group"}]})
