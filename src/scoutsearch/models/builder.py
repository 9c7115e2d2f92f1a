"""Query builder snapshot handed from searchable models to engines."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from scoutsearch.engines.base.engine import Engine


class IndexMode(str, Enum):
    """Which of the two configured base names an index identity uses."""

    READ = "read"
    WRITE = "write"


class SortClause(BaseModel):
    """A single ``(column, direction)`` sort directive."""

    model_config = ConfigDict(frozen=True)

    column: str
    direction: str = Field(default="asc", pattern="^(asc|desc)$")


SearchCallback = Callable[[Any, str, dict[str, Any]], Any]


class Builder(BaseModel):
    """Application-level search request for one searchable model type.

    Holds the free-text query, equality / set filters, sort clauses and an
    optional result limit. A ``callback`` replaces the engine's own request
    execution: it receives ``(client, query, params)`` and its return value
    is used as the raw search result.

    Example:
        >>> Order.search("acme").where("status", "paid").order_by("created_at", "desc").take(20)
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: Any = Field(description="Searchable model class the query targets")
    query: str = Field(default="", description="Free-text query")
    wheres: dict[str, Any] = Field(default_factory=dict, description="column -> scalar or list of scalars")
    orders: list[SortClause] = Field(default_factory=list, description="Sort clauses in priority order")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of hits")
    callback: SearchCallback | None = Field(default=None, description="Custom search execution hook")

    # ── Fluent construction ──────────────────────────────────────────────

    def where(self, column: str, value: Any) -> Builder:
        """Add an exact-match (phrase) filter."""
        self.wheres[column] = value
        return self

    def where_in(self, column: str, values: Sequence[Any]) -> Builder:
        """Add a set-membership (terms) filter."""
        self.wheres[column] = list(values)
        return self

    def order_by(self, column: str, direction: str = "asc") -> Builder:
        self.orders.append(SortClause(column=column, direction=direction.lower()))
        return self

    def take(self, limit: int) -> Builder:
        self.limit = limit
        return self

    # ── Execution ────────────────────────────────────────────────────────

    @property
    def engine(self) -> Engine:
        return self.model.searchable_using()

    def raw(self) -> Any:
        """Return the raw search engine response."""
        return self.engine.search(self)

    def keys(self) -> list[str]:
        """Return the matching document ids in relevance order."""
        return self.engine.keys(self)

    def get(self) -> list[Any]:
        """Return hydrated models in relevance order."""
        return self.engine.get(self)

    def paginate(self, per_page: int = 15, page: int = 1) -> Any:
        """Return one page of raw results, including the ``nbPages`` count."""
        return self.engine.paginate(self, per_page, page)
