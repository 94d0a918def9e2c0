from __future__ import annotations

import pytest

from patient_directory.domain.query import Query, SortSpec
from patient_directory.query.fields import DEFAULT_SEARCH_FIELDS
from patient_directory.query.params import normalize_query, parse_sort

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def test_normalize_query_defaults_when_empty():
    query = normalize_query({})

    assert query.page == 1
    assert query.limit == DEFAULT_LIMIT
    assert query.offset == 0
    assert query.search == ""
    assert query.search_fields == DEFAULT_SEARCH_FIELDS
    assert dict(query.filters) == {}
    assert query.sort is None
    assert query.then_by == ()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("500", MAX_LIMIT),
        ("100", MAX_LIMIT),
        ("25", 25),
        ("0", 1),
        ("-5", 1),
        ("abc", DEFAULT_LIMIT),
        ("", DEFAULT_LIMIT),
        ("7.9", 7),
    ],
)
def test_limit_is_clamped_and_coerced(raw, expected):
    assert normalize_query({"limit": raw}).limit == expected


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("3", 3), ("0", 1), ("-3", 1), ("x", 1), ("2.7", 2), ("nan", 1), ("inf", 1)],
)
def test_page_is_positive_and_coerced(raw, expected):
    assert normalize_query({"page": raw}).page == expected


def test_offset_derived_from_page_when_absent():
    query = normalize_query({"page": "3", "limit": "20"})
    assert query.offset == 40


def test_explicit_offset_overrides_page():
    query = normalize_query({"page": "3", "limit": "20", "offset": "5"})
    assert query.page == 3
    assert query.offset == 5


def test_negative_offset_clamps_and_garbage_falls_back_to_page():
    assert normalize_query({"offset": "-4"}).offset == 0
    assert normalize_query({"page": "2", "offset": "abc"}).offset == DEFAULT_LIMIT


def test_search_is_trimmed_and_lowercased():
    assert normalize_query({"search": "  JoHn  "}).search == "john"


def test_search_fields_are_cleaned_in_order():
    query = normalize_query({"searchFields": "contact, patient_name,,contact"})
    assert query.search_fields == ("contact", "patient_name")


def test_empty_search_fields_fall_back_to_default():
    assert normalize_query({"searchFields": " , "}).search_fields == DEFAULT_SEARCH_FIELDS


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("age:desc", SortSpec(field="age", direction="desc")),
        ("age", SortSpec(field="age", direction="asc")),
        ("age:asc", SortSpec(field="age", direction="asc")),
        ("age:DESC", SortSpec(field="age", direction="asc")),
        ("age:sideways", SortSpec(field="age", direction="asc")),
        (":desc", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_sort(raw, expected):
    assert parse_sort(raw) == expected


def test_sort_fields_become_tie_breakers():
    query = normalize_query({"sort": "age", "sortFields": "patient_name:desc,patient_id"})
    assert query.then_by == (
        SortSpec(field="patient_name", direction="desc"),
        SortSpec(field="patient_id", direction="asc"),
    )


def test_unreserved_keys_become_multi_value_filters():
    query = normalize_query(
        [
            ("medical_issue", "fever"),
            ("page", "2"),
            ("medical_issue", "rash"),
            ("page", "5"),
            ("ward", "B"),
        ]
    )

    assert query.page == 2  # first value of a repeated reserved key
    assert dict(query.filters) == {"medical_issue": ("fever", "rash"), "ward": ("B",)}


def test_mapping_with_list_values_accumulates_filters():
    query = normalize_query({"age_range": ["0-18", "65+"], "limit": ["5", "50"]})
    assert dict(query.filters) == {"age_range": ("0-18", "65+")}
    assert query.limit == 5


def test_reserved_keys_never_become_filters():
    query = normalize_query(
        {"sortFields": "age", "searchFields": "age", "offset": "1", "search": "x", "sort": "age"}
    )
    assert dict(query.filters) == {}


def test_normalized_filters_cannot_be_changed_in_place():
    query = normalize_query({"medical_issue": "fever"})

    with pytest.raises(TypeError):
        query.filters["medical_issue"] = ("rash",)  # type: ignore[index]
    with pytest.raises(TypeError):
        Query().filters["ward"] = ("B",)  # type: ignore[index]
    assert dict(query.filters) == {"medical_issue": ("fever",)}


def test_configurable_limits():
    assert normalize_query({}, default_limit=25).limit == 25
    assert normalize_query({"limit": "60"}, max_limit=50).limit == 50
