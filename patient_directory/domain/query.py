"""
Query and result contracts for the Patient Directory.

`Query` is the normalized, immutable form of a caller's request; the engine
never sees raw parameters. `ResultEnvelope` is what every caller gets back,
including on failure (with `error` set and an empty page).
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, field_validator

SortDirection = Literal["asc", "desc"]


class SortSpec(BaseModel):
    field: str
    direction: SortDirection = "asc"

    model_config = {"frozen": True}

    @property
    def descending(self) -> bool:
        return self.direction == "desc"


class Query(BaseModel):
    """
    Normalized request consumed by the query engine.

    Invariants: `page >= 1`, `1 <= limit`, `offset >= 0`, `search` is already
    trimmed and lower-cased, `filters` is a read-only mapping.
    """

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    offset: int = Field(0, ge=0)
    search: str = ""
    search_fields: Tuple[str, ...] = ()
    filters: Mapping[str, Tuple[str, ...]] = Field(default_factory=dict, validate_default=True)
    sort: Optional[SortSpec] = None
    then_by: Tuple[SortSpec, ...] = ()

    model_config = {"frozen": True}

    @field_validator("filters")
    @classmethod
    def _freeze_filters(cls, value: Mapping[str, Tuple[str, ...]]) -> Mapping[str, Tuple[str, ...]]:
        return MappingProxyType(dict(value))


class ResultEnvelope(BaseModel):
    """
    One page of results plus pagination metadata.

    `total` counts records after search and filters, before pagination.
    """

    total: int = 0
    page: int = 1
    limit: int = 10
    has_next_page: bool = Field(False, alias="hasNextPage")
    has_prev_page: bool = Field(False, alias="hasPrevPage")
    total_pages: int = Field(0, alias="totalPages")
    data: List[Dict[str, Any]] = Field(default_factory=list)
    error: Optional[str] = None

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }

    @classmethod
    def failure(cls, message: str, limit: int = 10) -> "ResultEnvelope":
        """Well-formed empty envelope carrying an error message."""
        return cls(total=0, page=1, limit=limit, data=[], error=message)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize with camelCase keys; `error` appears only on failure."""
        payload = self.model_dump(by_alias=True)
        if self.error is None:
            payload.pop("error")
        return payload


__all__ = ["Query", "ResultEnvelope", "SortDirection", "SortSpec"]
