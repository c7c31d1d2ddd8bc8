"""Chart lifecycle manager.

Owns every live chart instance, keyed by surface id (one surface per metric
card). Guarantees:

 - at most one live instance per surface at any time
 - an existing instance is disposed *before* its replacement is created
 - ``sync(surface, None)`` tears the surface down and creates nothing
 - a structurally equal config is a no-op (no dispose, no create)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional
import logging

from gui.services.event_bus import EventBus, GUIEvent

from .types import ChartConfig, ChartInstance

log = logging.getLogger(__name__)

__all__ = ["ChartFactory", "ChartLifecycleManager"]

ChartFactory = Callable[[str, ChartConfig], ChartInstance]


@dataclass
class _Slot:
    config: ChartConfig
    instance: ChartInstance


class ChartLifecycleManager:
    def __init__(self, factory: ChartFactory, *, event_bus: EventBus | None = None) -> None:
        self._factory = factory
        self._bus = event_bus
        self._slots: Dict[str, _Slot] = {}
        self.created = 0
        self.disposed = 0

    def sync(self, surface_id: str, config: Optional[ChartConfig]) -> bool:
        """Bring ``surface_id`` in line with ``config``; returns True if anything changed."""
        slot = self._slots.get(surface_id)
        if slot is not None and config is not None and slot.config == config:
            return False
        if slot is None and config is None:
            return False
        if slot is not None:
            self.dispose(surface_id)
        if config is None:
            return True
        instance = self._factory(surface_id, config)
        self._slots[surface_id] = _Slot(config=config, instance=instance)
        self.created += 1
        log.debug("Created chart for surface %s", surface_id)
        if self._bus is not None:
            self._bus.publish(GUIEvent.CHART_CREATED, surface_id)
        return True

    def dispose(self, surface_id: str) -> None:
        slot = self._slots.pop(surface_id, None)
        if slot is None:
            return
        slot.instance.dispose()
        self.disposed += 1
        log.debug("Disposed chart for surface %s", surface_id)

    def dispose_all(self) -> None:
        for surface_id in list(self._slots):
            self.dispose(surface_id)

    # Introspection ---------------------------------------------------
    def instance(self, surface_id: str) -> ChartInstance | None:
        slot = self._slots.get(surface_id)
        return slot.instance if slot else None

    def live_count(self) -> int:
        return len(self._slots)

    def surfaces(self) -> list[str]:
        return list(self._slots)
