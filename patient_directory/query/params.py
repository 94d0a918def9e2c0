"""
Raw parameter parsing: untyped key -> value(s) input into an immutable Query.

Input mirrors URL query strings: either a mapping whose values are a string
or a sequence of strings, or an iterable of (key, value) pairs where a key
may repeat. Recognized keys configure paging, search and sorting; every
other key becomes a filter.

Malformed numbers never raise; they fall back to defaults.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from patient_directory.domain.query import Query, SortSpec
from patient_directory.query.fields import DEFAULT_SEARCH_FIELDS

RawParams = Union[Mapping[str, Union[str, Sequence[str]]], Iterable[Tuple[str, str]]]

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

RESERVED_KEYS = frozenset({"page", "limit", "offset", "search", "searchFields", "sort", "sortFields"})


def _pairs(raw: RawParams) -> Iterator[Tuple[str, str]]:
    if isinstance(raw, Mapping):
        for key, value in raw.items():
            if value is None:
                continue
            if isinstance(value, str):
                yield key, value
            else:
                for item in value:
                    yield key, str(item)
    else:
        for key, value in raw:
            yield key, str(value)


def _parse_int(text: Optional[str]) -> Optional[int]:
    """Integer value of `text`, truncating decimals; None when not numeric."""
    if text is None or not text.strip():
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def _split_list(text: Optional[str]) -> List[str]:
    """Comma-separated entries, trimmed, empties and duplicates dropped."""
    if not text:
        return []
    seen: List[str] = []
    for part in text.split(","):
        name = part.strip()
        if name and name not in seen:
            seen.append(name)
    return seen


def parse_sort(text: Optional[str]) -> Optional[SortSpec]:
    """Parse `field[:direction]`; anything but exactly "desc" sorts ascending."""
    if not text:
        return None
    parts = text.split(":")
    field = parts[0].strip()
    if not field:
        return None
    direction = parts[1] if len(parts) > 1 else "asc"
    return SortSpec(field=field, direction="desc" if direction == "desc" else "asc")


def normalize_query(
    raw: RawParams,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> Query:
    """
    Build a Query from raw request parameters.

    Parameters
    ----------
    raw : RawParams
        Mapping or (key, value) pairs as received from the transport.
    default_limit : int
        Page size used when `limit` is missing or not numeric.
    max_limit : int
        Upper bound applied to `limit`.

    Returns
    -------
    Query
        The normalized, immutable request.
    """
    options: Dict[str, str] = {}
    filters: Dict[str, List[str]] = {}
    for key, value in _pairs(raw):
        if key in RESERVED_KEYS:
            # first occurrence wins, like URLSearchParams.get
            options.setdefault(key, value)
        else:
            filters.setdefault(key, []).append(value)

    parsed_page = _parse_int(options.get("page"))
    page = max(parsed_page if parsed_page is not None else DEFAULT_PAGE, 1)

    parsed_limit = _parse_int(options.get("limit"))
    limit = max(min(parsed_limit if parsed_limit is not None else default_limit, max_limit), 1)

    parsed_offset = _parse_int(options.get("offset"))
    offset = max(parsed_offset, 0) if parsed_offset is not None else (page - 1) * limit

    search_fields = _split_list(options.get("searchFields")) or list(DEFAULT_SEARCH_FIELDS)

    then_by = tuple(
        spec for spec in (parse_sort(item) for item in _split_list(options.get("sortFields"))) if spec
    )

    return Query(
        page=page,
        limit=limit,
        offset=offset,
        search=options.get("search", "").strip().lower(),
        search_fields=tuple(search_fields),
        filters={name: tuple(values) for name, values in filters.items()},
        sort=parse_sort(options.get("sort")),
        then_by=then_by,
    )


__all__ = ["DEFAULT_LIMIT", "MAX_LIMIT", "RESERVED_KEYS", "RawParams", "normalize_query", "parse_sort"]
