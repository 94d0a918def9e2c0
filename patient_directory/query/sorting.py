"""
Stable, null-last sorting of records by one primary key and optional
tie-breakers.
"""

from __future__ import annotations

import unicodedata
from functools import cmp_to_key
from typing import Any, List, Optional, Sequence, Tuple

from patient_directory.domain.query import SortSpec
from patient_directory.query.fields import Record, field_value, is_number, value_text


def collation_key(text: str) -> Tuple[str, str]:
    """
    Locale-style ordering key: accents and case are ignored first, then
    lower case sorts before upper case.
    """
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text.swapcase()


def _sign(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def compare_values(left: Any, right: Any, descending: bool = False) -> int:
    """Three-way comparison; None sorts last in both directions."""
    if left is None and right is None:
        return 0
    if left is None:
        return 1
    if right is None:
        return -1
    if is_number(left) and is_number(right):
        result = _sign(left, right)
    else:
        result = _sign(collation_key(value_text(left)), collation_key(value_text(right)))
    return -result if descending else result


def sort_records(
    records: Sequence[Record],
    sort: Optional[SortSpec],
    then_by: Sequence[SortSpec] = (),
) -> List[Record]:
    """
    Return a new list ordered by `sort`, then each of `then_by`.

    Without `sort` the input order is kept. Records comparing equal on every
    key keep their input order.
    """
    if sort is None:
        return list(records)
    keys = (sort, *then_by)

    def _compare(left: Record, right: Record) -> int:
        for spec in keys:
            result = compare_values(
                field_value(left, spec.field), field_value(right, spec.field), spec.descending
            )
            if result:
                return result
        return 0

    return sorted(records, key=cmp_to_key(_compare))


__all__ = ["collation_key", "compare_values", "sort_records"]
