"""
Query service: binds the data source, settings, logging and profiling to the
pure query engine.

Usage (example from a transport):
    from patient_directory.service import execute_query

    envelope = execute_query([("search", "jo"), ("medical_issue", "fever")])
    payload = envelope.to_payload()

A data source that cannot supply the collection does not raise out of
`execute_query`; the caller receives a well-formed envelope with `error` set.
"""

from __future__ import annotations

from typing import Optional

from patient_directory.config import Settings, get_settings
from patient_directory.domain.query import ResultEnvelope
from patient_directory.infrastructure.data_source import (
    DataSourceError,
    PatientStore,
    get_patient_store,
)
from patient_directory.query.engine import run_query
from patient_directory.query.params import RawParams, normalize_query
from patient_directory.utils.logging import get_logger
from patient_directory.utils.profiler import profile_block

log = get_logger(__name__)


def error_envelope(message: str, settings: Optional[Settings] = None) -> ResultEnvelope:
    """Empty first-page envelope carrying `message`, with the default page size."""
    settings = settings or get_settings()
    return ResultEnvelope.failure(message, limit=settings.query_default_limit)


def execute_query(
    raw: RawParams,
    store: Optional[PatientStore] = None,
    settings: Optional[Settings] = None,
) -> ResultEnvelope:
    """
    Run one query against the current patient snapshot.

    Parameters
    ----------
    raw : RawParams
        Untyped request parameters as received from the transport.
    store : PatientStore | None
        Snapshot provider. Defaults to the process-wide store.
    settings : Settings | None
        Query defaults. Defaults to the cached settings.

    Returns
    -------
    ResultEnvelope
        The result page, or an error envelope if the data source failed.
    """
    settings = settings or get_settings()
    store = store or get_patient_store()

    try:
        records = store.snapshot()
    except DataSourceError as exc:
        log.exception("[QUERY FAILED] patient data unavailable", extra={"path": str(store.path)})
        return error_envelope(str(exc), settings)

    query = normalize_query(
        raw,
        default_limit=settings.query_default_limit,
        max_limit=settings.query_max_limit,
    )
    with profile_block("query") as stats:
        envelope = run_query(records, query)

    log.info(
        "[QUERY] served",
        extra={
            "search": query.search,
            "filters": sorted(query.filters),
            "sort": query.sort.field if query.sort else None,
            "total": envelope.total,
            "page": envelope.page,
            "limit": envelope.limit,
            "duration_ms": stats.duration_ms,
        },
    )
    return envelope


__all__ = ["error_envelope", "execute_query"]
