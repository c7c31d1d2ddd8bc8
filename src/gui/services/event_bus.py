"""EventBus core.

Lightweight synchronous publish/subscribe mechanism with typed events, used
by the dashboard window to react to card visibility and chart creation
without wiring those steps to each other directly.

Goals:
 - Minimal, testable surface (no Qt dependency)
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - One-shot (once) subscriptions and unsubscribe handles
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from threading import RLock
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "GUIEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]


class GUIEvent(str, Enum):  # str subclass so values double as plain event names
    CHART_CREATED = "chart_created"
    CARD_VISIBLE = "card_visible"


@dataclass
class Event:
    name: str  # matches GUIEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked while the lock is NOT held (copy-first strategy) so a
    handler can subscribe/unsubscribe recursively without deadlock. Exceptions
    raised by handlers are collected in ``errors`` instead of propagating.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | GUIEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = name.value if isinstance(name, GUIEvent) else name
        sub = Subscription(event=key, handler=handler, once=once)
        with self._lock:
            self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        with self._lock:
            bucket = self._subs.get(sub.event)
            if bucket:
                self._subs[sub.event] = [s for s in bucket if s is not sub]
                if not self._subs[sub.event]:
                    self._subs.pop(sub.event, None)
        sub.active = False

    def clear(self) -> None:
        with self._lock:
            self._subs.clear()
            self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | GUIEvent, payload: Any = None) -> Event:
        key = name.value if isinstance(name, GUIEvent) else name
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        with self._lock:
            subs = list(self._subs.get(key, ()))
        spent: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - isolate handler failures
                self._errors.append((evt, exc))
            else:
                if sub.once:
                    spent.append(sub)
        for sub in spent:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | GUIEvent) -> int:
        key = name.value if isinstance(name, GUIEvent) else name
        with self._lock:
            return len(self._subs.get(key, ()))

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        with self._lock:
            return list(self._errors)
