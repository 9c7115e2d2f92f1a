"""Configuration layer."""

from scoutsearch.config.settings import ElasticsearchSettings, ObservabilitySettings, Settings

__all__ = ["ElasticsearchSettings", "ObservabilitySettings", "Settings"]
