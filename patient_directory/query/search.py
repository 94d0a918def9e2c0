"""
Free-text search across a configurable, ordered list of fields.
"""

from __future__ import annotations

from typing import Sequence

from patient_directory.query.fields import (
    CONTACT_FIELD,
    Record,
    contact_entries,
    field_value,
    is_number,
    number_text,
)


def _contact_matches(record: Record, needle: str) -> bool:
    for entry in contact_entries(record):
        address = entry.get("address")
        email = entry.get("email")
        number = entry.get("number")
        if isinstance(address, str) and needle in address.lower():
            return True
        if isinstance(email, str) and needle in email.lower():
            return True
        # phone numbers are matched verbatim
        if isinstance(number, str) and needle in number:
            return True
    return False


def _field_matches(record: Record, field: str, needle: str) -> bool:
    if field == CONTACT_FIELD:
        return _contact_matches(record, needle)
    value = field_value(record, field)
    if isinstance(value, str):
        return needle in value.lower()
    if is_number(value):
        return needle in number_text(value)
    return False


def matches_search(record: Record, search: str, search_fields: Sequence[str]) -> bool:
    """
    True when `search` is empty or any of `search_fields` contains it.

    `search` must already be trimmed and lower-cased. Fields are tried in
    order and the first hit wins.
    """
    if not search:
        return True
    return any(_field_matches(record, field, search) for field in search_fields)


__all__ = ["matches_search"]
