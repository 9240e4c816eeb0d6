"""Runtime services shared by every layer: telemetry and the event bus."""

from .bus import EventBus

__all__ = ["EventBus"]
