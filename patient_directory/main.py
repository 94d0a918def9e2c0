from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import typer
import uvicorn

from patient_directory.api import create_app
from patient_directory.config import get_settings
from patient_directory.infrastructure.data_source import PatientStore
from patient_directory.reporter import print_results
from patient_directory.service import execute_query
from patient_directory.utils.logging import configure_logging

app = typer.Typer(help="Patient Directory CLI.")


def _parse_filter(text: str) -> Tuple[str, str]:
    key, sep, value = text.partition("=")
    if not sep or not key.strip():
        raise typer.BadParameter(f"Expected key=value, got '{text}'", param_hint="--filter")
    return key.strip(), value


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"env={settings.app_env} | data={settings.data_file} | "
        f"limit default={settings.query_default_limit} max={settings.query_max_limit} | "
        f"api={settings.api_host}:{settings.api_port}"
    )


@app.command()
def query(
    page: Optional[int] = typer.Option(None, "--page", "-p", help="Page number (1-based)."),
    limit: Optional[int] = typer.Option(None, "--limit", "-l", help="Page size (capped by settings)."),
    offset: Optional[int] = typer.Option(None, "--offset", help="Explicit start index; overrides --page."),
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Case-insensitive text to find."),
    search_fields: Optional[str] = typer.Option(
        None,
        "--search-fields",
        help="Comma-separated fields to search (e.g., patient_name,contact).",
    ),
    sort: Optional[str] = typer.Option(None, "--sort", help="Sort key as field[:asc|desc]."),
    sort_fields: Optional[str] = typer.Option(
        None,
        "--sort-fields",
        help="Comma-separated tie-breakers as field[:asc|desc].",
    ),
    filters: Optional[List[str]] = typer.Option(
        None,
        "--filter",
        "-f",
        help="Filter as key=value; repeat for multiple values (e.g., -f age_range=65+).",
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the raw JSON envelope."),
    data_file: Optional[Path] = typer.Option(
        None,
        "--data-file",
        "-d",
        help="Override the patient data file (default from settings).",
    ),
) -> None:
    """
    Run one query against the patient data and print the result page.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)

    params: List[Tuple[str, str]] = []
    for key, value in (
        ("page", page),
        ("limit", limit),
        ("offset", offset),
        ("search", search),
        ("searchFields", search_fields),
        ("sort", sort),
        ("sortFields", sort_fields),
    ):
        if value is not None:
            params.append((key, str(value)))
    params.extend(_parse_filter(item) for item in filters or [])

    store = PatientStore(data_file) if data_file else None
    envelope = execute_query(params, store=store, settings=settings)

    if as_json:
        typer.echo(json.dumps(envelope.to_payload(), indent=2))
    else:
        print_results(envelope)

    if envelope.error:
        raise typer.Exit(code=1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from settings)."),
    port: Optional[int] = typer.Option(None, "--port", help="Bind port (default from settings)."),
) -> None:
    """
    Serve the HTTP API with uvicorn.
    """
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)
    uvicorn.run(create_app(settings=settings), host=host or settings.api_host, port=port or settings.api_port)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
