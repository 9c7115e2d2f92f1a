"""Search engine layer — Backends that store and query searchable models.

Built-in engines:
  - elasticsearch: Elasticsearch / OpenSearch via bulk and search APIs

Subclass ``Engine`` to connect another backend.
"""
