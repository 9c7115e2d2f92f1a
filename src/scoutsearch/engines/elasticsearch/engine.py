"""Elasticsearch engine — Bulk indexing and query translation for searchable models.

Works with any client exposing ``bulk``, ``search`` and
``indices.put_mapping`` in the shape of ``opensearch-py`` / ``elasticsearch-py``.
Each model type lives in its own index named ``{base}_{model.searchable_as()}``,
where ``base`` is the read base name for searches and the write base name for
every write (upserts, deletes, mapping changes). Keeping the two apart allows
reindexing behind aliases.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from scoutsearch.config.settings import ElasticsearchSettings
from scoutsearch.engines.base.engine import Engine
from scoutsearch.engines.base.exceptions import InvalidIndexModeError
from scoutsearch.events.dispatcher import EventDispatcher
from scoutsearch.models.builder import Builder, IndexMode
from scoutsearch.models.events import BulkErrorsEvent, BulkFailure
from scoutsearch.models.response import SearchEnvelope

if TYPE_CHECKING:
    from scoutsearch.config.settings import Settings

logger = logging.getLogger(__name__)

_COLLECTION_TYPES = (list, tuple, set, frozenset)


class ElasticsearchEngine(Engine):
    """Search engine backed by an Elasticsearch or OpenSearch cluster.

    Partial failures inside a bulk request are not raised. They are
    collected into ``BulkFailure`` records and published as a single
    ``BulkErrorsEvent`` on the dispatcher. Transport errors raised by the
    client propagate unchanged.

    Args:
        client: Synchronous search client.
        read_index_base_name: Base name for searched indices.
        write_index_base_name: Base name for written indices.
        config: Connection settings. ``index_read`` / ``index_write``
            values other than ``None``, empty strings included, take
            precedence over the constructor base names.
        dispatcher: Receives ``BulkErrorsEvent`` notifications.
    """

    INDEX_READ = IndexMode.READ
    INDEX_WRITE = IndexMode.WRITE

    def __init__(
        self,
        client: Any,
        read_index_base_name: str = INDEX_READ.value,
        write_index_base_name: str = INDEX_WRITE.value,
        *,
        config: ElasticsearchSettings | None = None,
        dispatcher: EventDispatcher | None = None,
    ) -> None:
        self._client = client
        self._config = config or ElasticsearchSettings()
        self._read_index_base_name = (
            self._config.index_read if self._config.index_read is not None else read_index_base_name
        )
        self._write_index_base_name = (
            self._config.index_write if self._config.index_write is not None else write_index_base_name
        )
        self._dispatcher = dispatcher or EventDispatcher()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        client: Any = None,
        dispatcher: EventDispatcher | None = None,
    ) -> ElasticsearchEngine:
        """Build an engine (and, unless given, its client) from settings."""
        if client is None:
            from scoutsearch.engines.elasticsearch.client import create_client

            client = create_client(settings.elasticsearch)
        return cls(client, config=settings.elasticsearch, dispatcher=dispatcher)

    @property
    def client(self) -> Any:
        return self._client

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher

    @property
    def read_index_base_name(self) -> str:
        return self._read_index_base_name

    @property
    def write_index_base_name(self) -> str:
        return self._write_index_base_name

    @property
    def chunk_size(self) -> int:
        """Models per bulk request when a model type is reindexed or flushed."""
        return self._config.chunk_size

    # ── Writes ───────────────────────────────────────────────────────────

    def update(self, models: Sequence[Any]) -> None:
        """Upsert models: missing documents are created, existing ones merged."""
        models = list(models)
        if not models:
            return

        params: dict[str, Any] = {"body": []}
        for model in models:
            params["body"].append(
                {
                    "update": {
                        "_id": model.get_scout_key(),
                        "_index": self.model_index_name(model, self.INDEX_WRITE),
                    }
                }
            )
            params["body"].append({"doc": model.to_searchable_array(), "doc_as_upsert": True})

        logger.debug("Sending bulk update of %d models", len(models))
        result = self._client.bulk(body=params["body"])
        self._check_result_for_errors("update", result, params)

    def delete(self, models: Sequence[Any]) -> None:
        """Remove models from their write index."""
        models = list(models)
        if not models:
            return

        params: dict[str, Any] = {"body": []}
        for model in models:
            params["body"].append(
                {
                    "delete": {
                        "_id": model.get_scout_key(),
                        "_index": self.model_index_name(model, self.INDEX_WRITE),
                    }
                }
            )

        logger.debug("Sending bulk delete of %d models", len(models))
        result = self._client.bulk(body=params["body"])
        self._check_result_for_errors("delete", result, params)

    def flush(self, model: Any) -> None:
        """Remove every record of ``model`` by streaming it in key order."""
        model.remove_all_from_search()

    def import_all(self, model: Any) -> None:
        """Re-submit every record of ``model`` through ``update``."""
        model.make_all_searchable()

    def put_mapping(self, index_mode: IndexMode | str, model: Any, mapping: Mapping[str, Any]) -> Any:
        """Update the field mapping of the model's index.

        ``mapping`` may be a full mapping (with a ``properties`` key) or just
        the properties. The configured ``dynamic_date_formats`` are always
        sent and win over a value supplied in ``mapping``.

        Returns:
            The acknowledgement returned by the cluster.
        """
        body: dict[str, Any] = {"dynamic_date_formats": list(self._config.dynamic_date_formats)}
        if "properties" in mapping:
            body.update({key: value for key, value in mapping.items() if key not in body})
        else:
            body["properties"] = dict(mapping)

        if self._config.mapping_type:
            body = {self._config.mapping_type: body}

        params = {"index": self.model_index_name(model, index_mode), "body": body}
        logger.info("Putting mapping on %s", params["index"])
        return self._client.indices.put_mapping(index=params["index"], body=params["body"])

    # ── Queries ──────────────────────────────────────────────────────────

    def search(self, builder: Builder) -> Any:
        options = {"filters": self._filters(builder), "size": builder.limit}
        return self._perform_search(builder, {key: value for key, value in options.items() if value})

    def paginate(self, builder: Builder, per_page: int, page: int) -> Any:
        """Search one page and add ``nbPages``, the page count rounded up.

        A callback result that is not a mapping is returned unchanged.
        """
        if per_page < 1:
            raise ValueError(f"per_page must be positive, got {per_page}")

        result = self._perform_search(
            builder,
            {
                "filters": self._filters(builder),
                "from": (page * per_page) - per_page,
                "size": per_page,
            },
        )

        result = _as_mapping(result)
        if not isinstance(result, Mapping):
            # a search callback may return anything; pass it through untouched
            return result

        result = dict(result)
        result["nbPages"] = math.ceil(self.get_total_count(result) / per_page)
        return result

    def _perform_search(self, builder: Builder, options: dict[str, Any]) -> Any:
        params: dict[str, Any] = {
            "index": self.model_index_name(builder.model, self.INDEX_READ),
            "body": {
                "query": {
                    "bool": {
                        "must": [{"query_string": {"query": f"*{builder.query}*"}}],
                    }
                }
            },
        }

        sort = self._sort(builder)
        if sort:
            params["body"]["sort"] = sort

        if options.get("from") is not None:
            params["body"]["from"] = options["from"]

        if options.get("size") is not None:
            params["body"]["size"] = options["size"]

        if options.get("filters"):
            params["body"]["query"]["bool"]["must"].extend(options["filters"])

        if builder.callback is not None:
            return builder.callback(self._client, builder.query, params)

        logger.debug("Searching %s", params["index"])
        return self._client.search(index=params["index"], body=params["body"])

    @staticmethod
    def _filters(builder: Builder) -> list[dict[str, Any]]:
        """Translate ``wheres`` into ``terms`` (collections) or ``match_phrase`` (scalars) clauses."""
        clauses: list[dict[str, Any]] = []
        for column, value in builder.wheres.items():
            if isinstance(value, _COLLECTION_TYPES):
                clauses.append({"terms": {column: list(value)}})
            else:
                clauses.append({"match_phrase": {column: value}})
        return clauses

    @staticmethod
    def _sort(builder: Builder) -> list[dict[str, str]] | None:
        if not builder.orders:
            return None
        return [{order.column: order.direction} for order in builder.orders]

    # ── Results ──────────────────────────────────────────────────────────

    def map_ids(self, results: Any) -> list[str]:
        return SearchEnvelope.from_raw(results).ids

    def map(self, builder: Builder, results: Any, model: Any) -> list[Any]:
        """Hydrate hits through ``model.get_scout_models_by_ids``.

        Models whose key is not among the hits are dropped and the rest are
        returned in hit order, whatever order the lookup produced. A missing
        ``hits.total`` (``track_total_hits: false``) does not short-circuit.
        """
        envelope = SearchEnvelope.from_raw(results)
        if (envelope.total_reported and envelope.total == 0) or not envelope.ids:
            return []

        keys = envelope.ids
        positions = {key: position for position, key in enumerate(keys)}

        found = [
            instance
            for instance in model.get_scout_models_by_ids(builder, keys)
            if str(instance.get_scout_key()) in positions
        ]
        return sorted(found, key=lambda instance: positions[str(instance.get_scout_key())])

    def get_total_count(self, results: Any) -> int:
        return SearchEnvelope.from_raw(results).total

    # ── Index naming ─────────────────────────────────────────────────────

    def model_index_name(self, model: Any, index_mode: IndexMode | str = INDEX_READ) -> str:
        """Return the index name for a model, e.g. ``'myapp_write_1_orders'``.

        Raises:
            InvalidIndexModeError: If ``index_mode`` is not read or write.
        """
        try:
            mode = IndexMode(index_mode)
        except ValueError:
            raise InvalidIndexModeError(f"Invalid index type: {index_mode}") from None

        if mode is IndexMode.READ:
            return f"{self._read_index_base_name}_{model.searchable_as()}"
        return f"{self._write_index_base_name}_{model.searchable_as()}"

    # ── Failure reporting ────────────────────────────────────────────────

    def _check_result_for_errors(self, operation: str, result: Any, params: dict[str, Any]) -> None:
        """Publish a ``BulkErrorsEvent`` if the bulk response reports failed items."""
        result = _as_mapping(result)
        if result.get("errors") is not True:
            return

        errors: list[BulkFailure] = []
        for item in result.get("items") or []:
            for outcome in item.values():
                if not isinstance(outcome, Mapping) or not outcome.get("error"):
                    continue
                errors.append(
                    BulkFailure(
                        index=outcome.get("_index"),
                        key=outcome.get("_id"),
                        message=_format_error(outcome),
                    )
                )

        if not errors:
            return

        logger.warning("Bulk %s reported %d failed items", operation, len(errors))
        self._dispatcher.dispatch(BulkErrorsEvent(operation=operation, errors=tuple(errors), params=params))


def _format_error(outcome: Mapping[str, Any]) -> str:
    """Format an item error as ``'[type] reason'``, or dump the whole item result."""
    error = outcome["error"]
    if isinstance(error, Mapping) and "type" in error and "reason" in error:
        return f"[{error['type']}] {error['reason']}"
    return json.dumps(outcome, indent=4, default=str)


def _as_mapping(result: Any) -> Mapping[str, Any]:
    # elasticsearch-py 8 returns ObjectApiResponse, which exposes the dict as .body
    if isinstance(result, Mapping):
        return result
    return getattr(result, "body", result)
