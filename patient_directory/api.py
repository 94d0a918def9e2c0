"""HTTP transport for the patient query service."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import JSONResponse

from patient_directory.config import Settings, get_settings
from patient_directory.infrastructure.data_source import (
    DataSourceError,
    PatientStore,
    get_patient_store,
)
from patient_directory.service import error_envelope, execute_query
from patient_directory.utils.logging import configure_logging, get_logger

log = get_logger(__name__)


def create_app(
    store: Optional[PatientStore] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Build the app; `store` and `settings` default to the process-wide ones.

    Logging is set up from `settings` only if nothing configured it yet, so a
    hosting server keeps its own handlers.
    """
    settings = settings or get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json, force=False)
    store = store or get_patient_store()
    router = APIRouter(prefix="/api", tags=["patients"])

    @router.get("/data")
    def list_patients(request: Request) -> JSONResponse:
        """
        Paginated, searchable, filterable patient listing.

        Every query parameter other than page/limit/offset/search/
        searchFields/sort/sortFields is a filter and may repeat.
        """
        try:
            envelope = execute_query(
                request.query_params.multi_items(), store=store, settings=settings
            )
        except Exception as exc:  # noqa: BLE001 - every failure still gets an envelope
            log.exception("[API] query failed", extra={"query": str(request.query_params)})
            envelope = error_envelope(str(exc) or "Internal Server Error", settings)
        status_code = 500 if envelope.error else 200
        return JSONResponse(envelope.to_payload(), status_code=status_code)

    app = FastAPI(title="Patient Directory")

    @app.get("/health")
    def health():
        try:
            patients = len(store.snapshot())
        except DataSourceError as exc:
            return JSONResponse({"status": "unavailable", "error": str(exc)}, status_code=503)
        return {"status": "ok", "patients": patients}

    app.include_router(router)
    return app


__all__ = ["create_app"]
