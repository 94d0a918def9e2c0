"""
Patient data source for the Patient Directory.

Loads the patient collection from a JSON file, checks each record against
the `Patient` model without rewriting it, and hands out immutable tuple
snapshots. The PatientStore swaps snapshots atomically on reload, so a
query in flight always sees one consistent collection.

Includes retry logic for transient read failures using tenacity.
"""

from __future__ import annotations

import json
import threading
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Tuple

from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception_type,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from patient_directory.config import get_settings
from patient_directory.domain.models import Patient
from patient_directory.utils.logging import get_logger

log = get_logger(__name__)

Snapshot = Tuple[Dict[str, Any], ...]


class DataSourceError(RuntimeError):
    """The patient collection could not be supplied."""


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=0.1, max=1),
    retry=retry_if_exception_type(OSError) & retry_if_not_exception_type(FileNotFoundError),
    reraise=True,
)
def _read_text(path: Path) -> str:
    """
    Read the data file with automatic retry.

    Retries up to 3 times with exponential backoff for transient I/O errors.
    A missing file is not transient and fails immediately.
    """
    return path.read_text(encoding="utf-8")


def parse_patients(raw: Any) -> Snapshot:
    """
    Turn decoded JSON into a snapshot of patient mappings.

    Records are served exactly as they appear in the source. A record that
    does not fit the `Patient` schema (no `patient_id`, a text `age`) is kept
    and logged; its odd fields simply never match. Entries that are not JSON
    objects cannot be queried and are dropped with a warning.

    Raises
    ------
    DataSourceError
        If the payload is not a list.
    """
    if not isinstance(raw, list):
        raise DataSourceError(f"Patient data must be a JSON array, got {type(raw).__name__}")
    records = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            log.warning(
                "Skipping patient entry that is not an object",
                extra={"index": index, "entry_type": type(item).__name__},
            )
            continue
        try:
            Patient.model_validate(item)
        except ValidationError as exc:
            log.warning(
                "Patient record does not match the schema; serving it as-is",
                extra={"index": index, "errors": exc.error_count()},
            )
        records.append(dict(item))
    return tuple(records)


def load_patients(path: Path | str) -> Snapshot:
    """
    Load the patient collection from a JSON file.

    Raises
    ------
    DataSourceError
        If the file is missing, unreadable after retries, not valid JSON, or
        not a JSON array.
    """
    path = Path(path)
    try:
        text = _read_text(path)
    except FileNotFoundError as exc:
        raise DataSourceError(f"Patient data file not found: {path}") from exc
    except OSError as exc:
        raise DataSourceError(f"Could not read patient data from {path}: {exc}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataSourceError(f"Patient data file {path} is not valid JSON: {exc}") from exc

    records = parse_patients(raw)
    log.info("Patient data loaded", extra={"path": str(path), "patients": len(records)})
    return records


class PatientStore:
    """
    Thread-safe holder of the current patient snapshot.

    The first `snapshot()` call loads the file; `reload()` replaces the
    snapshot in one step.
    """

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._snapshot: Optional[Snapshot] = None

    @classmethod
    def from_records(cls, records: Iterable[Any], path: Path | str = "<memory>") -> "PatientStore":
        """Build a store around an in-memory collection (parsed like file data)."""
        store = cls(path)
        store._snapshot = parse_patients(list(records))
        return store

    @property
    def path(self) -> Path:
        return self._path

    def snapshot(self) -> Snapshot:
        """Return the current snapshot, loading it on first use."""
        with self._lock:
            if self._snapshot is None:
                self._snapshot = load_patients(self._path)
            return self._snapshot

    def reload(self) -> Snapshot:
        """Re-read the data file and swap the snapshot in."""
        records = load_patients(self._path)
        with self._lock:
            self._snapshot = records
        return records


@lru_cache(maxsize=1)
def get_patient_store() -> PatientStore:
    """Process-wide store bound to the configured data file."""
    return PatientStore(get_settings().data_file)


__all__ = [
    "DataSourceError",
    "PatientStore",
    "Snapshot",
    "get_patient_store",
    "load_patients",
    "parse_patients",
]
