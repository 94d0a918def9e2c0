"""
Patient Directory - paginated, searchable, filterable view over patient records.

This package provides an in-memory query engine and the thin layers around it:

- Query normalization from raw URL-style parameters
- Multi-field and nested contact search
- Multi-value equality, categorical and age-range filters
- Stable, null-last sorting with optional tie-breakers
- Offset/page pagination with navigation metadata
- A JSON data source, an HTTP API and a CLI
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from patient_directory.config import Settings, get_settings
from patient_directory.domain import Contact, Patient, Query, ResultEnvelope, SortSpec
from patient_directory.infrastructure.data_source import DataSourceError, PatientStore
from patient_directory.query import normalize_query, query_records, run_query
from patient_directory.service import execute_query
from patient_directory.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Contact",
    "Patient",
    "Query",
    "ResultEnvelope",
    "SortSpec",
    # Engine
    "normalize_query",
    "query_records",
    "run_query",
    # Data source and service
    "DataSourceError",
    "PatientStore",
    "execute_query",
    # Logging
    "configure_logging",
    "get_logger",
]
