"""Searchable models — The contract engines expect from application records.

An engine never owns a model's lifecycle. It only reads the search key, the
searchable attributes and the index suffix, and asks the model type to
hydrate records for a list of ids or to stream itself for reindexing.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import islice
from typing import TYPE_CHECKING, Any, ClassVar, Protocol, runtime_checkable

from scoutsearch.models.builder import Builder, SearchCallback

if TYPE_CHECKING:
    from scoutsearch.engines.base.engine import Engine


@runtime_checkable
class Searchable(Protocol):
    """Protocol for models that can be indexed and searched."""

    def get_scout_key(self) -> Any:
        """Document id used in the search index."""

    def to_searchable_array(self) -> dict[str, Any]:
        """Indexable fields of this record."""

    @classmethod
    def searchable_as(cls) -> str:
        """Suffix of the index this model type is stored in."""

    @classmethod
    def get_scout_models_by_ids(cls, builder: Builder, ids: list[str]) -> Iterable[Any]:
        """Load the records for ``ids``, in any order."""

    @classmethod
    def make_all_searchable(cls) -> None:
        """Re-submit every record to the search engine."""

    @classmethod
    def remove_all_from_search(cls) -> None:
        """Remove every record from the search engine."""


class SearchableMixin:
    """Default implementation of ``Searchable`` for ORM model classes.

    Concrete models provide:
      - ``searchable_using()``: the engine instance
      - ``query_in_key_order()``: every record, ordered by primary key
      - ``get_scout_models_by_ids()``: records for a list of ids

    Everything else has a working default that can be overridden.
    """

    search_chunk_size: ClassVar[int | None] = None

    @classmethod
    def searchable_using(cls) -> Engine:
        raise NotImplementedError(f"{cls.__name__} must define searchable_using()")

    @classmethod
    def query_in_key_order(cls) -> Iterable[Any]:
        raise NotImplementedError(f"{cls.__name__} must define query_in_key_order()")

    @classmethod
    def get_scout_models_by_ids(cls, builder: Builder, ids: list[str]) -> Iterable[Any]:
        raise NotImplementedError(f"{cls.__name__} must define get_scout_models_by_ids()")

    # ── Keys and payload ─────────────────────────────────────────────────

    @classmethod
    def get_key_name(cls) -> str:
        return "id"

    def get_key(self) -> Any:
        return getattr(self, self.get_key_name())

    @classmethod
    def get_scout_key_name(cls) -> str:
        return cls.get_key_name()

    def get_scout_key(self) -> Any:
        return self.get_key()

    @classmethod
    def searchable_as(cls) -> str:
        return cls.__name__.lower()

    def to_searchable_array(self) -> dict[str, Any]:
        return {name: value for name, value in vars(self).items() if not name.startswith("_")}

    # ── Single record ────────────────────────────────────────────────────

    def searchable(self) -> None:
        self.searchable_using().update([self])

    def unsearchable(self) -> None:
        self.searchable_using().delete([self])

    # ── Model type ───────────────────────────────────────────────────────

    @classmethod
    def search(cls, query: str = "", callback: SearchCallback | None = None) -> Builder:
        return Builder(model=cls, query=query, callback=callback)

    @classmethod
    def make_all_searchable(cls, chunk_size: int | None = None) -> None:
        engine = cls.searchable_using()
        for chunk in cls._chunks(chunk_size or cls._default_chunk_size(engine)):
            engine.update(chunk)

    @classmethod
    def remove_all_from_search(cls, chunk_size: int | None = None) -> None:
        engine = cls.searchable_using()
        for chunk in cls._chunks(chunk_size or cls._default_chunk_size(engine)):
            engine.delete(chunk)

    @classmethod
    def _default_chunk_size(cls, engine: Engine) -> int:
        return cls.search_chunk_size or getattr(engine, "chunk_size", 500)

    @classmethod
    def _chunks(cls, size: int) -> Iterator[list[Any]]:
        records = iter(cls.query_in_key_order())
        while chunk := list(islice(records, size)):
            yield chunk
