"""Shared test fixtures and configuration."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from typing import Any, ClassVar
from unittest.mock import MagicMock

import pytest

from scoutsearch.config.settings import ElasticsearchSettings, Settings
from scoutsearch.engines.elasticsearch.engine import ElasticsearchEngine
from scoutsearch.events.dispatcher import EventDispatcher
from scoutsearch.models.builder import Builder
from scoutsearch.models.events import BulkErrorsEvent
from scoutsearch.searchable import SearchableMixin


class Order(SearchableMixin):
    """In-memory searchable model used across the unit tests."""

    engine: ClassVar[Any] = None
    store: ClassVar[list[Order]] = []

    def __init__(self, id: int, title: str, status: str = "paid") -> None:
        self.id = id
        self.title = title
        self.status = status

    def __repr__(self) -> str:
        return f"Order({self.id})"

    @classmethod
    def searchable_as(cls) -> str:
        return "orders"

    @classmethod
    def searchable_using(cls) -> Any:
        return cls.engine

    @classmethod
    def query_in_key_order(cls) -> Iterable[Order]:
        return sorted(cls.store, key=lambda order: order.id)

    @classmethod
    def get_scout_models_by_ids(cls, builder: Builder, ids: list[str]) -> list[Order]:
        wanted = set(ids)
        return [order for order in cls.store if str(order.id) in wanted]


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def es_client() -> MagicMock:
    """Search client double whose bulk calls succeed without item errors."""
    client = MagicMock()
    client.bulk.return_value = {"took": 3, "errors": False, "items": []}
    client.search.return_value = {"took": 1, "hits": {"total": {"value": 0, "relation": "eq"}, "hits": []}}
    client.indices.put_mapping.return_value = {"acknowledged": True}
    return client


@pytest.fixture
def received_events() -> list[BulkErrorsEvent]:
    return []


@pytest.fixture
def dispatcher(received_events: list[BulkErrorsEvent]) -> EventDispatcher:
    """Dispatcher that records every event it delivers."""
    d = EventDispatcher()
    d.listen(received_events.append)
    return d


@pytest.fixture
def engine(es_client: MagicMock, dispatcher: EventDispatcher) -> ElasticsearchEngine:
    return ElasticsearchEngine(
        es_client,
        "myapp_read_1",
        "myapp_write_1",
        config=ElasticsearchSettings(),
        dispatcher=dispatcher,
    )


@pytest.fixture
def order_model(engine: ElasticsearchEngine) -> Iterator[type[Order]]:
    """The ``Order`` model bound to the test engine, with three stored records."""
    Order.engine = engine
    Order.store = [Order(2, "Blue widget"), Order(1, "Red widget"), Order(3, "Green gadget", status="open")]
    yield Order
    Order.engine = None
    Order.store = []


@pytest.fixture
def orders(order_model: type[Order]) -> list[Order]:
    return list(order_model.store)


@pytest.fixture
def restore_root_logging() -> Iterator[None]:
    """Undo handler and level changes made by ``setup_logging``."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
