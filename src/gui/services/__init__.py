"""Service layer exports.

Responsibilities:
 - EventBus publish/subscribe core
 - LoadOrchestrator (dataset fetch state machine)

The Qt-bound ``LoadRunner`` is imported from its module directly so the pure
services stay importable without PyQt.
"""

from .event_bus import EventBus, GUIEvent  # noqa: F401
from .load_orchestrator import LoadOrchestrator, LoadState  # noqa: F401

__all__ = [
    "EventBus",
    "GUIEvent",
    "LoadOrchestrator",
    "LoadState",
]
