"""Engine event dispatch."""

from scoutsearch.events.dispatcher import EventDispatcher, log_bulk_failures

__all__ = ["EventDispatcher", "log_bulk_failures"]
