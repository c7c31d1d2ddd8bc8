"""LoadRunner service (Qt integration for the LoadOrchestrator).

Runs each fetch in a ``DatasetLoadWorker`` thread so the GUI never blocks,
and applies outcomes on the GUI thread through queued signals. Workers whose
ticket was superseded are kept referenced until their thread exits, but their
results are ignored by the orchestrator.
"""

from __future__ import annotations

from typing import Awaitable, Callable, List, Optional

from PyQt6.QtCore import QObject

from core.async_http import fetch_text
from gui.workers import DatasetLoadWorker

from .load_orchestrator import LoadOrchestrator, LoadTicket


class LoadRunner(QObject):
    """Facade owning the worker threads for dataset loads."""

    def __init__(
        self,
        orchestrator: LoadOrchestrator,
        fetcher: Optional[Callable[[str], Awaitable[str]]] = None,
    ) -> None:
        super().__init__()
        self._orchestrator = orchestrator
        self._fetcher = fetcher or fetch_text
        self._workers: List[DatasetLoadWorker] = []

    def start(self, source: str) -> LoadTicket:
        for worker in self._workers:
            worker.cancel()
        ticket = self._orchestrator.begin(source)
        worker = DatasetLoadWorker(ticket, self._fetcher)
        worker.finished_ok.connect(self._on_ok)  # type: ignore
        worker.failed.connect(self._on_failed)  # type: ignore
        worker.finished.connect(lambda w=worker: self._cleanup(w))  # type: ignore
        self._workers.append(worker)
        worker.start()
        return ticket

    def cancel(self) -> None:
        for worker in self._workers:
            worker.cancel()
        self._orchestrator.cancel()

    def shutdown(self, wait_ms: int = 2000) -> None:
        self.cancel()
        for worker in list(self._workers):
            worker.wait(wait_ms)
        self._workers.clear()

    def _on_ok(self, ticket: LoadTicket, body: str) -> None:
        self._orchestrator.settle(ticket, body=body)

    def _on_failed(self, ticket: LoadTicket, error: BaseException) -> None:
        self._orchestrator.settle(ticket, error=error)

    def _cleanup(self, worker: DatasetLoadWorker) -> None:
        if worker in self._workers:
            self._workers.remove(worker)


__all__ = ["LoadRunner"]
