"""scoutsearch — Searchable-model adapter for Elasticsearch and OpenSearch."""

__version__ = "0.1.0"
