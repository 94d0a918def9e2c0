"""
Field filters: AND across fields, OR across the accepted values of a field.

Most fields use case-insensitive equality on their text form. A few names
have dedicated handlers registered in `_filter_handlers()`; a registered
handler always takes precedence over the generic rule.
"""

from __future__ import annotations

from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

from patient_directory.query.fields import (
    AGE_FIELD,
    AGE_RANGE_FILTER,
    CATEGORY_FIELD,
    Record,
    field_value,
    numeric_value,
    value_text,
)

FilterHandler = Callable[[Record, Sequence[str]], bool]
AgeRange = Tuple[float, Optional[float]]


def _parse_bound(text: str) -> Optional[float]:
    text = text.strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return None if value != value else value  # NaN never bounds anything


def parse_age_range(text: str) -> Optional[AgeRange]:
    """
    Parse `min-max` (inclusive) or `min+` (unbounded above).

    Returns None for anything else, including missing or non-numeric bounds.
    """
    if "-" in text:
        parts = text.split("-")
        if len(parts) != 2:
            return None
        low, high = _parse_bound(parts[0]), _parse_bound(parts[1])
        if low is None or high is None:
            return None
        return low, high
    if text.endswith("+"):
        low = _parse_bound(text[:-1])
        return (low, None) if low is not None else None
    return None


def _in_range(age: float, bounds: AgeRange) -> bool:
    low, high = bounds
    return age >= low and (high is None or age <= high)


def _matches_age_range(record: Record, accepted: Sequence[str]) -> bool:
    age = numeric_value(record, AGE_FIELD)
    if age is None:
        return False
    for text in accepted:
        bounds = parse_age_range(text)
        if bounds is not None and _in_range(age, bounds):
            return True
    return False


def _matches_category(record: Record, accepted: Sequence[str]) -> bool:
    value = field_value(record, CATEGORY_FIELD)
    if not isinstance(value, str):
        return False
    lowered = value.lower()
    return any(lowered == candidate.lower() for candidate in accepted)


def _matches_equality(record: Record, field: str, accepted: Sequence[str]) -> bool:
    value = field_value(record, field)
    if value is None:
        return False
    lowered = value_text(value).lower()
    return any(lowered == str(candidate).lower() for candidate in accepted)


def _filter_handlers() -> Dict[str, FilterHandler]:
    """Registry of fields with non-generic filter semantics."""
    return {
        AGE_RANGE_FILTER: _matches_age_range,
        CATEGORY_FIELD: _matches_category,
    }


def matches_filters(record: Record, filters: Mapping[str, Sequence[str]]) -> bool:
    """True when the record satisfies every non-empty filter entry."""
    handlers = _filter_handlers()
    for field, accepted in filters.items():
        if not accepted:
            continue
        handler = handlers.get(field)
        if handler is not None:
            if not handler(record, accepted):
                return False
        elif not _matches_equality(record, field, accepted):
            return False
    return True


__all__ = ["matches_filters", "parse_age_range"]
