"""Base search engine — Abstract interface between searchable models and a backend.

Every engine translates between the searchable-model world and one search
service. It is responsible for:
  1. Writing model collections to the index (upsert / delete)
  2. Executing ``Builder`` queries and pagination
  3. Turning raw results into ordered ids and hydrated models
  4. Removing all records of a model type
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from scoutsearch.models.builder import Builder


class Engine(ABC):
    """Abstract base class for search engines.

    All engines must implement:
      - update(): Upsert models into the index
      - delete(): Remove models from the index
      - search() / paginate(): Execute a ``Builder`` query
      - map_ids() / map() / get_total_count(): Interpret raw results
      - flush(): Remove every record of a model type

    Engines hold no per-call state and issue at most one request per call.
    """

    @abstractmethod
    def update(self, models: Sequence[Any]) -> None:
        """Upsert the given models into the index."""

    @abstractmethod
    def delete(self, models: Sequence[Any]) -> None:
        """Remove the given models from the index."""

    @abstractmethod
    def search(self, builder: Builder) -> Any:
        """Execute a search and return the raw result."""

    @abstractmethod
    def paginate(self, builder: Builder, per_page: int, page: int) -> Any:
        """Execute a search for one page of results.

        Args:
            builder: The query to run.
            per_page: Page size.
            page: One-based page number.
        """

    @abstractmethod
    def map_ids(self, results: Any) -> list[str]:
        """Return the document ids of a raw result in hit order."""

    @abstractmethod
    def map(self, builder: Builder, results: Any, model: Any) -> list[Any]:
        """Hydrate a raw result into model instances, in hit order."""

    @abstractmethod
    def get_total_count(self, results: Any) -> int:
        """Return the total number of matches reported by a raw result."""

    @abstractmethod
    def flush(self, model: Any) -> None:
        """Remove all records of the given model type from the index."""

    def keys(self, builder: Builder) -> list[str]:
        """Search and return only the matching ids."""
        return self.map_ids(self.search(builder))

    def get(self, builder: Builder) -> list[Any]:
        """Search and hydrate the results in one step."""
        return self.map(builder, self.search(builder), builder.model)
