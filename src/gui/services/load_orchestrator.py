"""Load orchestrator for the single dashboard dataset.

Drives the fetch lifecycle (idle -> loading -> ready / error) and is the
only owner of the current Dataset. Every load gets a new generation number
and a cancellation token; starting a new load cancels the previous token, and
outcomes delivered for a cancelled or superseded ticket are dropped without
touching state.

Two entry points share the same settle logic:
 - ``await orchestrator.load(source)`` for asyncio hosts and tests
 - ``begin(source)`` + ``settle(ticket, ...)`` for the Qt worker, which fetches
   on a background thread and hands the outcome back to the GUI thread
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional
import asyncio
import logging

from config import settings
from core.async_http import fetch_text
from domain.models import Dataset, DatasetParseError, parse_dataset

log = logging.getLogger(__name__)

__all__ = [
    "CancelToken",
    "LoadOrchestrator",
    "LoadPhase",
    "LoadState",
    "LoadTicket",
]

Fetcher = Callable[[str], Awaitable[str]]
StateListener = Callable[["LoadState"], None]


class LoadPhase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class LoadState:
    phase: LoadPhase
    generation: int = 0
    dataset: Optional[Dataset] = field(default=None, compare=False)
    message: Optional[str] = None

    @classmethod
    def idle(cls, generation: int = 0) -> "LoadState":
        return cls(LoadPhase.IDLE, generation)

    @property
    def is_ready(self) -> bool:
        return self.phase is LoadPhase.READY

    @property
    def is_loading(self) -> bool:
        return self.phase is LoadPhase.LOADING

    @property
    def is_error(self) -> bool:
        return self.phase is LoadPhase.ERROR


class CancelToken:
    def __init__(self) -> None:
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def is_cancelled(self) -> bool:
        return self._cancelled


@dataclass(frozen=True)
class LoadTicket:
    generation: int
    source: str
    token: CancelToken = field(compare=False)


class LoadOrchestrator:
    """Owns the current LoadState and the Dataset it carries."""

    def __init__(
        self,
        fetcher: Fetcher | None = None,
        *,
        error_message: str = settings.LOAD_ERROR_MESSAGE,
    ) -> None:
        self._fetcher: Fetcher = fetcher or fetch_text
        self._error_message = error_message
        self._generation = 0
        self._ticket: LoadTicket | None = None
        self._state = LoadState.idle()
        self._listeners: List[StateListener] = []

    # Observation -----------------------------------------------------
    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def dataset(self) -> Dataset | None:
        return self._state.dataset if self._state.is_ready else None

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register ``listener`` for every state transition; returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def is_current(self, ticket: LoadTicket) -> bool:
        return ticket is self._ticket and not ticket.token.is_cancelled()

    # Lifecycle -------------------------------------------------------
    def begin(self, source: str) -> LoadTicket:
        """Start a new load generation, superseding any in-flight request."""
        if self._ticket is not None:
            self._ticket.token.cancel()
        self._generation += 1
        ticket = LoadTicket(self._generation, source, CancelToken())
        self._ticket = ticket
        log.info("Loading dataset from %s (generation %d)", source, ticket.generation)
        self._transition(LoadState(LoadPhase.LOADING, ticket.generation))
        return ticket

    def settle(
        self,
        ticket: LoadTicket,
        *,
        body: str | None = None,
        error: BaseException | None = None,
    ) -> bool:
        """Apply the outcome of ``ticket``'s request.

        Returns False (and changes nothing) when the ticket was cancelled or
        superseded by a newer load.
        """
        if not self.is_current(ticket):
            log.debug("Dropping result of superseded load generation %d", ticket.generation)
            return False
        self._ticket = None
        if error is None:
            try:
                dataset = parse_dataset(body if body is not None else "")
            except DatasetParseError as e:
                error = e
            else:
                self._transition(LoadState(LoadPhase.READY, ticket.generation, dataset=dataset))
                return True
        log.warning("Dataset load from %s failed: %s", ticket.source, error)
        self._transition(
            LoadState(LoadPhase.ERROR, ticket.generation, message=self._error_message)
        )
        return True

    async def load(self, source: str) -> LoadState:
        ticket = self.begin(source)
        try:
            body = await self._fetcher(source)
        except asyncio.CancelledError:
            if self.is_current(ticket):
                self.cancel()
            raise
        except Exception as e:  # noqa: BLE001 - every fetch failure becomes an Error state
            self.settle(ticket, error=e)
        else:
            self.settle(ticket, body=body)
        return self._state

    def cancel(self) -> None:
        """Abort the in-flight request; no error is reported for it."""
        ticket = self._ticket
        if ticket is None:
            return
        ticket.token.cancel()
        self._ticket = None
        log.debug("Load generation %d aborted", ticket.generation)
        self._transition(LoadState.idle(ticket.generation))

    # Internal --------------------------------------------------------
    def _transition(self, state: LoadState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
