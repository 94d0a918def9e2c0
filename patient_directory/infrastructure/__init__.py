"""
Infrastructure package for the Patient Directory.

Centralizes data-source concerns (file loading, validation, snapshots).
Keep this layer focused on I/O and resource management, decoupled from the
query engine.
"""

from patient_directory.infrastructure.data_source import (
    DataSourceError,
    PatientStore,
    get_patient_store,
    load_patients,
)

__all__ = [
    "DataSourceError",
    "PatientStore",
    "get_patient_store",
    "load_patients",
]
