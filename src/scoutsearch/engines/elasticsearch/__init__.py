"""Elasticsearch / OpenSearch engine."""

from scoutsearch.engines.elasticsearch.client import create_client
from scoutsearch.engines.elasticsearch.engine import ElasticsearchEngine

__all__ = ["ElasticsearchEngine", "create_client"]
