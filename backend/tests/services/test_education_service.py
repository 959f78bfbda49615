"""Education Service tests — catalog loading from disk.

Tests cover:
    - Bundled diseases.json loads and every entry parses
    - Missing / malformed / wrong-shape files -> empty catalog, no exception
"""

import json

from app.config import get_settings
from app.services.education_service import EducationService, load_disease_catalog


def test_bundled_catalog_loads():
    catalog = load_disease_catalog(get_settings().diseases_path)

    assert "eczema" in catalog
    assert "unknown" in catalog
    assert len(catalog) >= 5


def test_missing_file_gives_empty_catalog(tmp_path):
    catalog = load_disease_catalog(tmp_path / "nope.json")

    assert len(catalog) == 0


def test_malformed_json_gives_empty_catalog(tmp_path):
    path = tmp_path / "diseases.json"
    path.write_text("{not json", encoding="utf-8")

    assert len(load_disease_catalog(path)) == 0


def test_list_instead_of_object_gives_empty_catalog(tmp_path):
    path = tmp_path / "diseases.json"
    path.write_text(json.dumps([{"condition": "Eczema"}]), encoding="utf-8")

    assert len(load_disease_catalog(path)) == 0


def test_bad_urgency_value_gives_empty_catalog(tmp_path):
    path = tmp_path / "diseases.json"
    path.write_text(
        json.dumps({"eczema": {"condition": "Eczema", "urgencyLevel": "soon"}}),
        encoding="utf-8",
    )

    assert len(load_disease_catalog(path)) == 0


def test_service_with_empty_catalog_falls_back(tmp_path):
    service = EducationService(load_disease_catalog(tmp_path / "nope.json"))

    result = service.enrich_prediction("Eczema", 0.9)

    assert result.condition == "Unknown Condition"
    assert service.is_chat_enabled("eczema") is False
    assert service.supported_conditions() == []
