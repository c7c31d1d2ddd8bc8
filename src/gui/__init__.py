"""Legends dashboard GUI public API.

Curated, intentionally small surface for external callers (launcher, tests)
without depending on deep internal module paths.

Avoids side-effect heavy imports: no QApplication is created here and no Qt
widget module is imported.
"""

from __future__ import annotations

from .services.event_bus import (  # noqa: F401
    EventBus,
    GUIEvent,
    Event,
)
from .services.load_orchestrator import (  # noqa: F401
    LoadOrchestrator,
    LoadPhase,
    LoadState,
)

__all__ = [
    "EventBus",
    "GUIEvent",
    "Event",
    "LoadOrchestrator",
    "LoadPhase",
    "LoadState",
]
