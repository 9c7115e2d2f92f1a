"""Failure records and the event raised for partially failed bulk requests."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class BulkFailure(BaseModel):
    """One directive the search engine rejected inside a bulk request."""

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

    index: str | None = Field(description="Index identity the directive targeted")
    key: str | None = Field(description="Document id")
    message: str = Field(description="'[type] reason', or the pretty-printed item result")


class BulkErrorsEvent(BaseModel):
    """Emitted when a bulk request succeeds overall but some items failed.

    Carries the operation name (``"update"`` or ``"delete"``), the collected
    failures, and the request that was sent so listeners can replay or log it.
    """

    model_config = ConfigDict(frozen=True)

    operation: str
    errors: tuple[BulkFailure, ...] = ()
    params: dict[str, Any] = Field(default_factory=dict)
