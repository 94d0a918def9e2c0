"""
Synthetic patient data generator for the Patient Directory.

Implements deterministic pseudo-random patient generation and JSON emission
in the shape the data source expects.
"""

from __future__ import annotations

import json
import random
import sys
import time
from pathlib import Path
from typing import Any

import typer

app = typer.Typer(help="Generate synthetic patient records as a JSON array.")

FIRST_NAMES = [
    "John", "Joanna", "Maria", "Liam", "Aisha", "Chen", "Fatima", "Noah",
    "Olivia", "Mateo", "Priya", "Kofi", "Elena", "Jonas", "Sofia", "Yuki",
]
LAST_NAMES = [
    "Smith", "Johnson", "Garcia", "Okafor", "Nguyen", "Khan", "Silva",
    "Müller", "Rossi", "Kowalski", "Haddad", "Tanaka", "Jones", "Brown",
]
MEDICAL_ISSUES = [
    "fever", "headache", "sore throat", "allergic reaction", "broken arm",
    "sprained ankle", "ear infection", "rash",
]
STREETS = ["Oak Street", "Maple Avenue", "Johnson Road", "River Lane", "Hill Park", "Elm Court"]
DOMAINS = ["example.com", "mail.test", "clinic.org"]


def _contact(rng: random.Random, first: str, last: str) -> dict[str, Any]:
    """One contact entry; roughly one in five sub-fields is missing."""
    return {
        "address": (
            f"{rng.randint(1, 999)} {rng.choice(STREETS)}" if rng.random() > 0.2 else None
        ),
        "number": (
            f"{rng.randint(200, 999)}-{rng.randint(100, 999)}-{rng.randint(1000, 9999)}"
            if rng.random() > 0.2
            else None
        ),
        "email": (
            f"{first}.{last}@{rng.choice(DOMAINS)}".lower() if rng.random() > 0.2 else None
        ),
    }


def _generate_patients(rows: int, seed: int) -> list[dict[str, Any]]:
    rng = random.Random(seed)
    patients: list[dict[str, Any]] = []
    for patient_id in range(1, rows + 1):
        first = rng.choice(FIRST_NAMES)
        last = rng.choice(LAST_NAMES)
        patients.append(
            {
                "patient_id": patient_id,
                "patient_name": f"{first} {last}",
                "age": rng.randint(1, 95),
                "photo_url": (
                    f"https://images.example.com/patients/{patient_id}.png"
                    if rng.random() > 0.3
                    else None
                ),
                "contact": [_contact(rng, first, last) for _ in range(rng.randint(1, 2))],
                "medical_issue": rng.choice(MEDICAL_ISSUES),
            }
        )
    return patients


def _write_json(path: Path, patients: list[dict[str, Any]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(patients, f, indent=2, ensure_ascii=False)
        f.write("\n")


@app.command()
def main(
    rows: int = typer.Option(1_000, help="Number of patients to generate"),
    out: Path = typer.Option(Path("data/data.json"), help="Output JSON path"),
    seed: int = typer.Option(42, help="Random seed for deterministic data"),
) -> None:
    if rows < 1:
        typer.echo("rows must be >= 1", err=True)
        sys.exit(1)

    t0 = time.perf_counter()
    patients = _generate_patients(rows, seed)
    _write_json(out, patients)
    dt = time.perf_counter() - t0
    typer.echo(f"Generated {rows} patients into {out} in {dt:.2f}s")


if __name__ == "__main__":
    app()
