"""
Query engine package for the Patient Directory.

Re-exports the engine entry points so callers can import from
`patient_directory.query` directly.
"""

from patient_directory.query.engine import query_records, run_query, select_records
from patient_directory.query.filters import matches_filters, parse_age_range
from patient_directory.query.pagination import paginate, total_pages
from patient_directory.query.params import normalize_query, parse_sort
from patient_directory.query.search import matches_search
from patient_directory.query.sorting import compare_values, sort_records

__all__ = [
    "compare_values",
    "matches_filters",
    "matches_search",
    "normalize_query",
    "paginate",
    "parse_age_range",
    "parse_sort",
    "query_records",
    "run_query",
    "select_records",
    "sort_records",
    "total_pages",
]
