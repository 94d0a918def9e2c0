"""
Pytest configuration for the Patient Directory.

Provides fixtures for:
- A small hand-written patient collection with edge cases
- A larger deterministic collection from the data generator
- JSON data files and stores built from either collection
- Settings overrides and cache isolation between tests
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Generator

import pytest

from patient_directory import config
from patient_directory.config import Settings
from patient_directory.infrastructure import data_source
from patient_directory.infrastructure.data_source import PatientStore
from scripts.generate_data import _generate_patients

PATIENTS: list[dict[str, Any]] = [
    {
        "patient_id": 1,
        "patient_name": "John Smith",
        "age": 34,
        "photo_url": "https://images.example.com/1.png",
        "contact": [
            {"address": "12 Oak Street", "number": "555-0101", "email": "john.smith@example.com"}
        ],
        "medical_issue": "fever",
    },
    {
        "patient_id": 2,
        "patient_name": "Joanna Garcia",
        "age": 7,
        "photo_url": None,
        "contact": [{"address": "9 Johnson Road", "number": "555-0102", "email": None}],
        "medical_issue": "ear infection",
    },
    {
        "patient_id": 3,
        "patient_name": "Maria Okafor",
        "age": 71,
        "photo_url": None,
        "contact": [{"address": None, "number": "555-0103", "email": "maria@clinic.org"}],
        "medical_issue": "Fever",
    },
    {
        "patient_id": 4,
        "patient_name": "Liam Nguyen",
        "age": 15,
        "photo_url": "https://images.example.com/4.png",
        "contact": [],
        "medical_issue": "headache",
    },
    {
        "patient_id": 5,
        "patient_name": "Aisha Khan",
        "photo_url": None,
        "contact": [{"address": "3 Elm Court", "number": None, "email": "AISHA.KHAN@MAIL.TEST"}],
        "medical_issue": "fever",
    },
    {
        "patient_id": 6,
        "patient_name": "Chen Silva",
        "age": 88,
        "photo_url": None,
        "contact": [{"address": "Hill Park", "number": "555-0106", "email": "chen@example.com"}],
        "medical_issue": "allergic reaction",
    },
    {
        "patient_id": 7,
        "patient_name": "Fatima Rossi",
        "age": 34,
        "photo_url": "https://images.example.com/7.png",
        "contact": [{"address": "40 River Lane", "number": "555-0107", "email": "fatima@mail.test"}],
        "medical_issue": "rash",
    },
    {
        "patient_id": 8,
        "patient_name": "Noah Tanaka",
        "age": 65,
        "photo_url": None,
        "contact": [{}],
        "medical_issue": "fever",
    },
]

GENERATED_ROWS = 60
GENERATED_SEED = 7


@pytest.fixture(autouse=True)
def _isolate_caches() -> Generator[None, None, None]:
    """
    Clear cached settings and the process-wide store around each test.
    """
    config.get_settings.cache_clear()
    data_source.get_patient_store.cache_clear()
    yield
    config.get_settings.cache_clear()
    data_source.get_patient_store.cache_clear()


@pytest.fixture
def patients() -> list[dict[str, Any]]:
    """
    Fresh copy of the hand-written collection (8 patients, one without age).
    """
    return copy.deepcopy(PATIENTS)


@pytest.fixture(scope="session")
def generated_patients() -> list[dict[str, Any]]:
    """
    Deterministic synthetic collection from the data generator.
    """
    return _generate_patients(GENERATED_ROWS, seed=GENERATED_SEED)


@pytest.fixture
def data_file(tmp_path: Path, patients: list[dict[str, Any]]) -> Path:
    """
    The hand-written collection written to a JSON file.
    """
    path = tmp_path / "patients.json"
    path.write_text(json.dumps(patients), encoding="utf-8")
    return path


@pytest.fixture
def store(patients: list[dict[str, Any]]) -> PatientStore:
    """
    In-memory store around the hand-written collection.
    """
    return PatientStore.from_records(patients)


@pytest.fixture
def test_settings(data_file: Path) -> Settings:
    """
    Settings fixture with test-specific overrides.
    """
    return Settings(
        data_file=data_file,
        log_level="DEBUG",
        query_default_limit=10,
        query_max_limit=100,
    )
