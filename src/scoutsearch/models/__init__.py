"""Data models."""

from scoutsearch.models.builder import Builder, IndexMode, SortClause
from scoutsearch.models.events import BulkErrorsEvent, BulkFailure
from scoutsearch.models.response import Hit, HitsEnvelope, SearchEnvelope, TotalHits

__all__ = [
    "Builder",
    "BulkErrorsEvent",
    "BulkFailure",
    "Hit",
    "HitsEnvelope",
    "IndexMode",
    "SearchEnvelope",
    "SortClause",
    "TotalHits",
]
