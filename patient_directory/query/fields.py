"""
Field names with special meaning to the query engine, plus typed getters.

Records are read-only mappings. Every lookup goes through these helpers so
that a missing key and an explicit null behave the same way everywhere.
"""

from __future__ import annotations

from typing import Any, Iterator, Mapping, Optional

Record = Mapping[str, Any]

AGE_FIELD = "age"
AGE_RANGE_FILTER = "age_range"
CATEGORY_FIELD = "medical_issue"
CONTACT_FIELD = "contact"
NAME_FIELD = "patient_name"

DEFAULT_SEARCH_FIELDS: tuple[str, ...] = (NAME_FIELD, CATEGORY_FIELD, CONTACT_FIELD)


def field_value(record: Record, name: str) -> Any:
    """Value of `name` on the record, or None when absent."""
    return record.get(name)


def is_number(value: Any) -> bool:
    # bool is an int subclass but never a numeric field value
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def numeric_value(record: Record, name: str) -> Optional[float]:
    value = field_value(record, name)
    return value if is_number(value) else None


def number_text(value: int | float) -> str:
    """Decimal text of a number; integral floats drop their `.0`."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def value_text(value: Any) -> str:
    """Text form used for equality filters and string collation."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return number_text(value)
    return str(value)


def contact_entries(record: Record) -> Iterator[Mapping[str, Any]]:
    """Contact entries of a record, skipping anything that is not a mapping."""
    contacts = field_value(record, CONTACT_FIELD)
    if not isinstance(contacts, (list, tuple)):
        return
    for entry in contacts:
        if isinstance(entry, Mapping):
            yield entry


__all__ = [
    "AGE_FIELD",
    "AGE_RANGE_FILTER",
    "CATEGORY_FIELD",
    "CONTACT_FIELD",
    "DEFAULT_SEARCH_FIELDS",
    "NAME_FIELD",
    "Record",
    "contact_entries",
    "field_value",
    "is_number",
    "number_text",
    "numeric_value",
    "value_text",
]
