from __future__ import annotations

from typing import Any, List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from patient_directory.domain.query import ResultEnvelope


def _first_contact(contacts: Any, key: str) -> str:
    """First non-empty `key` across a patient's contact entries."""
    if not isinstance(contacts, list):
        return ""
    for entry in contacts:
        if isinstance(entry, dict) and entry.get(key):
            return str(entry[key])
    return ""


def _format_age(age: Any) -> str:
    if age is None:
        return "N/A"
    if isinstance(age, float) and age.is_integer():
        return str(int(age))
    return str(age)


def build_table(envelope: ResultEnvelope) -> Table:
    """
    Render one result page as a rich table.

    The caption carries the pagination state so a truncated page is obvious.
    """
    title = "Patient Directory"
    if envelope.error:
        title = f"{title}\n[red]{envelope.error}[/red]"

    nav: List[str] = [f"Page {envelope.page} of {envelope.total_pages}", f"{envelope.total:,} matching"]
    if envelope.has_prev_page:
        nav.append("← prev")
    if envelope.has_next_page:
        nav.append("next →")

    table = Table(title=title, box=box.ROUNDED, caption=" │ ".join(nav))

    table.add_column("ID", justify="right", style="cyan", no_wrap=True)
    table.add_column("Name", style="bold")
    table.add_column("Age", justify="right", style="magenta")
    table.add_column("Medical Issue", style="yellow")
    table.add_column("Phone", style="green")
    table.add_column("Email", style="blue")

    for patient in envelope.data:
        contacts = patient.get("contact")
        table.add_row(
            str(patient.get("patient_id", "")),
            patient.get("patient_name") or "Unknown",
            _format_age(patient.get("age")),
            patient.get("medical_issue") or "",
            _first_contact(contacts, "number"),
            _first_contact(contacts, "email"),
        )
    return table


def print_results(envelope: ResultEnvelope, console: Optional[Console] = None) -> None:
    """Print a result page, or a notice when it is empty."""
    console = console or Console()

    if not envelope.data and not envelope.error:
        console.print("[yellow]No patients match this query.[/yellow]")
        return

    console.print(build_table(envelope))
