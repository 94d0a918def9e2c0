"""
Page slicing and navigation metadata.
"""

from __future__ import annotations

import math
from typing import Sequence

from patient_directory.domain.query import Query, ResultEnvelope
from patient_directory.query.fields import Record


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total else 0


def paginate(records: Sequence[Record], query: Query) -> ResultEnvelope:
    """
    Slice one page out of the filtered, sorted records.

    The window starts at `query.offset`; the navigation flags are derived
    from `query.page`, so an explicit offset that disagrees with the page
    number still reports flags for the page number.
    """
    total = len(records)
    pages = total_pages(total, query.limit)
    start = min(query.offset, total)
    end = min(start + query.limit, total)

    return ResultEnvelope(
        total=total,
        page=query.page,
        limit=query.limit,
        has_next_page=query.page < pages,
        has_prev_page=query.page > 1,
        total_pages=pages,
        data=[dict(record) for record in records[start:end]],
    )


__all__ = ["paginate", "total_pages"]
