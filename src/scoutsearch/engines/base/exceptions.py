"""Engine-specific exceptions."""


class EngineError(Exception):
    """Base exception for engine errors."""


class InvalidIndexModeError(EngineError, ValueError):
    """Raised when an index mode other than read or write is requested."""


class ConfigurationError(EngineError):
    """Raised when engine or client configuration is invalid."""
