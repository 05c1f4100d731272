"""In-process event dispatch."""

from infrastructure.events.bus import EventHandler, InProcessEventBus

__all__ = ["EventHandler", "InProcessEventBus"]
