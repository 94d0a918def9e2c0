"""
Query engine: search -> filter -> sort -> paginate over an in-memory
collection.

The engine is a pure function. It performs no I/O, never mutates the
collection it is given, and returns the same envelope for the same inputs.

Usage:
    from patient_directory.query import query_records

    envelope = query_records(patients, {"search": "jo", "sort": "age:desc"})
    envelope.to_payload()
"""

from __future__ import annotations

from typing import List, Sequence

from patient_directory.domain.query import Query, ResultEnvelope
from patient_directory.query.fields import Record
from patient_directory.query.filters import matches_filters
from patient_directory.query.pagination import paginate
from patient_directory.query.params import DEFAULT_LIMIT, MAX_LIMIT, RawParams, normalize_query
from patient_directory.query.search import matches_search
from patient_directory.query.sorting import sort_records


def select_records(records: Sequence[Record], query: Query) -> List[Record]:
    """Records passing both the search and the filters, in input order."""
    return [
        record
        for record in records
        if matches_search(record, query.search, query.search_fields)
        and matches_filters(record, query.filters)
    ]


def run_query(records: Sequence[Record], query: Query) -> ResultEnvelope:
    """Evaluate a normalized query against the collection."""
    selected = select_records(records, query)
    ordered = sort_records(selected, query.sort, query.then_by)
    return paginate(ordered, query)


def query_records(
    records: Sequence[Record],
    raw: RawParams,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> ResultEnvelope:
    """Normalize raw parameters, then evaluate them against the collection."""
    query = normalize_query(raw, default_limit=default_limit, max_limit=max_limit)
    return run_query(records, query)


__all__ = ["query_records", "run_query", "select_records"]
