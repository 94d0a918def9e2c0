from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from patient_directory.config import Settings
from patient_directory.infrastructure.data_source import PatientStore
from patient_directory.service import error_envelope, execute_query

CUSTOM_DEFAULT_LIMIT = 3
CUSTOM_MAX_LIMIT = 5
FEVER_PATIENTS = 4


def test_execute_query_runs_against_store(store: PatientStore, test_settings: Settings):
    envelope = execute_query(
        [("medical_issue", "fever"), ("sort", "age:desc")], store=store, settings=test_settings
    )

    assert envelope.error is None
    assert envelope.total == FEVER_PATIENTS
    assert [r["patient_id"] for r in envelope.data] == [3, 8, 1, 5]


def test_execute_query_uses_configured_limits(store: PatientStore, data_file: Path):
    settings = Settings(
        data_file=data_file,
        query_default_limit=CUSTOM_DEFAULT_LIMIT,
        query_max_limit=CUSTOM_MAX_LIMIT,
    )

    assert execute_query({}, store=store, settings=settings).limit == CUSTOM_DEFAULT_LIMIT
    assert execute_query({"limit": "50"}, store=store, settings=settings).limit == CUSTOM_MAX_LIMIT


def test_execute_query_falls_back_to_configured_store(test_settings: Settings, monkeypatch):
    monkeypatch.setenv("PATIENTS_DATA_FILE", str(test_settings.data_file))

    envelope = execute_query({"search": "okafor"})

    assert [r["patient_id"] for r in envelope.data] == [3]


def test_data_source_failure_yields_error_envelope(
    tmp_path: Path, test_settings: Settings, caplog: pytest.LogCaptureFixture
):
    store = PatientStore(tmp_path / "missing.json")

    with caplog.at_level(logging.ERROR):
        envelope = execute_query({"page": "4", "limit": "50"}, store=store, settings=test_settings)

    assert envelope.error is not None
    assert "not found" in envelope.error
    assert envelope.total == 0
    assert envelope.page == 1
    assert envelope.limit == test_settings.query_default_limit
    assert envelope.data == []
    assert not envelope.has_next_page
    assert not envelope.has_prev_page
    assert any("QUERY FAILED" in r.getMessage() for r in caplog.records)


def test_served_queries_are_logged_with_counts(
    store: PatientStore, test_settings: Settings, caplog: pytest.LogCaptureFixture
):
    with caplog.at_level(logging.INFO, logger="patient_directory.service"):
        execute_query({"medical_issue": "fever", "limit": "2"}, store=store, settings=test_settings)

    served = [r for r in caplog.records if r.getMessage() == "[QUERY] served"]
    assert len(served) == 1
    assert served[0].total == FEVER_PATIENTS
    assert served[0].limit == 2
    assert served[0].filters == ["medical_issue"]
    assert served[0].duration_ms >= 0


def test_error_envelope_uses_default_limit(test_settings: Settings):
    envelope = error_envelope("boom", test_settings)
    assert envelope.limit == test_settings.query_default_limit
    assert envelope.to_payload()["error"] == "boom"


def test_off_schema_records_do_not_take_down_the_collection(
    tmp_path: Path, patients, test_settings: Settings
):
    path = tmp_path / "mixed.json"
    patients.append({"patient_name": "No Id", "age": 40, "medical_issue": "rash"})
    patients.append({"patient_id": 10, "age": "unknown", "medical_issue": 5})
    path.write_text(json.dumps(patients), encoding="utf-8")

    fever = execute_query({"medical_issue": "fever"}, store=PatientStore(path), settings=test_settings)
    rash = execute_query({"medical_issue": "rash"}, store=PatientStore(path), settings=test_settings)

    assert fever.error is None
    assert [r["patient_id"] for r in fever.data] == [1, 3, 5, 8]
    assert [r.get("patient_id") for r in rash.data] == [7, None]
