"""Background worker thread for the dashboard data fetch."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from PyQt6.QtCore import QThread, pyqtSignal

from core.async_http import fetch_text
from gui.services.load_orchestrator import LoadTicket


class DatasetLoadWorker(QThread):
    """Fetch one source off the GUI thread.

    Emits ``finished_ok(ticket, body)`` or ``failed(ticket, exc)``; the receiver
    hands both to ``LoadOrchestrator.settle`` on the GUI thread, where stale
    tickets are dropped. Nothing is emitted once the ticket is cancelled.
    """

    finished_ok = pyqtSignal(object, str)
    failed = pyqtSignal(object, object)

    def __init__(
        self,
        ticket: LoadTicket,
        fetcher: Callable[[str], Awaitable[str]] = fetch_text,
    ) -> None:
        super().__init__()
        self.ticket = ticket
        self._fetcher = fetcher

    def run(self) -> None:  # type: ignore[override]
        try:
            body = asyncio.run(self._fetcher(self.ticket.source))
        except Exception as e:  # noqa: BLE001 - forwarded to the orchestrator
            if not self.ticket.token.is_cancelled():
                self.failed.emit(self.ticket, e)
            return
        if not self.ticket.token.is_cancelled():
            self.finished_ok.emit(self.ticket, body)

    def cancel(self) -> None:
        self.ticket.token.cancel()


__all__ = ["DatasetLoadWorker"]
