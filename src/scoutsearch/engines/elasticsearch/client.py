"""Client factory for the configured search backend.

Install the optional dependency for your cluster::

    pip install scoutsearch[opensearch]
    # or: pip install scoutsearch[elasticsearch]
"""

from __future__ import annotations

import logging
from typing import Any

from scoutsearch.config.settings import ElasticsearchSettings
from scoutsearch.engines.base.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def create_client(settings: ElasticsearchSettings) -> Any:
    """Create a synchronous ``OpenSearch`` or ``Elasticsearch`` client.

    Args:
        settings: Connection settings; ``settings.backend`` selects the library.

    Returns:
        The client instance. No request is sent.

    Raises:
        ConfigurationError: If the backend is unknown or its package is missing.
    """
    if settings.backend == "opensearch":
        return _create_opensearch_client(settings)
    if settings.backend == "elasticsearch":
        return _create_elasticsearch_client(settings)
    raise ConfigurationError(f"Unknown search backend: {settings.backend!r}")


def _create_opensearch_client(settings: ElasticsearchSettings) -> Any:
    try:
        from opensearchpy import OpenSearch
    except ImportError as e:
        raise ConfigurationError(
            "opensearch-py package is required.  Install with: pip install scoutsearch[opensearch]"
        ) from e

    client_kwargs: dict[str, Any] = {
        "hosts": settings.hosts,
        "verify_certs": settings.verify_certs,
        "ssl_show_warn": False,
    }
    if settings.username and settings.password:
        client_kwargs["http_auth"] = (settings.username, settings.password)
    if settings.api_key:
        client_kwargs.setdefault("headers", {})["Authorization"] = f"ApiKey {settings.api_key}"

    client_kwargs.update(settings.extra)
    logger.info("Creating OpenSearch client for %s", ", ".join(settings.hosts))
    return OpenSearch(**client_kwargs)


def _create_elasticsearch_client(settings: ElasticsearchSettings) -> Any:
    try:
        from elasticsearch import Elasticsearch
    except ImportError as e:
        raise ConfigurationError(
            "elasticsearch package is required.  Install with: pip install scoutsearch[elasticsearch]"
        ) from e

    client_kwargs: dict[str, Any] = {
        "hosts": settings.hosts,
        "verify_certs": settings.verify_certs,
    }
    if settings.username and settings.password:
        client_kwargs["basic_auth"] = (settings.username, settings.password)
    if settings.api_key:
        client_kwargs["api_key"] = settings.api_key

    client_kwargs.update(settings.extra)
    logger.info("Creating Elasticsearch client for %s", ", ".join(settings.hosts))
    return Elasticsearch(**client_kwargs)
