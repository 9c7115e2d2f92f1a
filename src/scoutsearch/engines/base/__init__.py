"""Base engine interface — Abstract classes for search engine backends."""

from scoutsearch.engines.base.engine import Engine
from scoutsearch.engines.base.exceptions import ConfigurationError, EngineError, InvalidIndexModeError

__all__ = ["ConfigurationError", "Engine", "EngineError", "InvalidIndexModeError"]
