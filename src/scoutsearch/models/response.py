"""Wire models for search engine responses.

The ``hits.total`` field changed shape between protocol versions: older
clusters report a bare integer, newer ones an object with ``value`` and
``relation``. Both are decoded into ``TotalHits`` when the envelope is
validated, so callers never branch on the version.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TotalHits(BaseModel):
    """Total hit count as reported by the engine."""

    value: int = Field(default=0, ge=0)
    relation: str = Field(default="eq", description="'eq' for exact, 'gte' for a lower bound")


class Hit(BaseModel):
    """A single search hit."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True, extra="ignore")

    id: str = Field(alias="_id")
    index: str | None = Field(default=None, alias="_index")
    score: float | None = Field(default=None, alias="_score")
    source: dict[str, Any] = Field(default_factory=dict, alias="_source")


class HitsEnvelope(BaseModel):
    """The ``hits`` section of a search response."""

    model_config = ConfigDict(extra="ignore")

    total: TotalHits | None = Field(default=None, description="None when the cluster did not track totals")
    hits: list[Hit] = Field(default_factory=list)

    @field_validator("total", mode="before")
    @classmethod
    def _normalize_total(cls, v: Any) -> Any:
        if isinstance(v, bool):
            raise ValueError("hits.total must be an integer or an object with a 'value' field")
        if isinstance(v, int):
            return {"value": v, "relation": "eq"}
        return v


class SearchEnvelope(BaseModel):
    """Decoded search response."""

    model_config = ConfigDict(extra="ignore")

    hits: HitsEnvelope = Field(default_factory=HitsEnvelope)
    took: int | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> SearchEnvelope:
        """Validate a raw client response (dict or mapping-like object)."""
        if isinstance(raw, SearchEnvelope):
            return raw
        if not isinstance(raw, Mapping):
            # elasticsearch-py 8 wraps responses in ObjectApiResponse
            raw = getattr(raw, "body", raw)
        return cls.model_validate(dict(raw))

    @property
    def total(self) -> int:
        """Total matches, or 0 when the response carries no total."""
        if self.hits.total is None:
            return 0
        return self.hits.total.value

    @property
    def total_reported(self) -> bool:
        return self.hits.total is not None

    @property
    def ids(self) -> list[str]:
        return [hit.id for hit in self.hits.hits]
