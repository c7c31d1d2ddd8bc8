"""DatasetLoadWorker and LoadRunner (threaded fetch, GUI-thread settle)."""

from __future__ import annotations

from PyQt6.QtCore import QCoreApplication

from gui.services.load_orchestrator import LoadOrchestrator
from gui.services.load_runner import LoadRunner
from gui.workers import DatasetLoadWorker
from tests.factories import two_rider_body


class DummyFetcher:
    def __init__(self, body: str = "", should_fail: bool = False):
        self.calls = []
        self.body = body
        self.should_fail = should_fail

    async def __call__(self, source):
        self.calls.append(source)
        if self.should_fail:
            raise RuntimeError("boom")
        return self.body


def test_worker_emits_body(qapp):
    orch = LoadOrchestrator()
    ticket = orch.begin("mem://data")
    worker = DatasetLoadWorker(ticket, DummyFetcher("payload"))
    results = []
    worker.finished_ok.connect(lambda t, body: results.append((t, body)))  # type: ignore
    worker.run()  # run inline; signals delivered directly
    assert results == [(ticket, "payload")]


def test_worker_emits_failure(qapp):
    orch = LoadOrchestrator()
    ticket = orch.begin("mem://data")
    worker = DatasetLoadWorker(ticket, DummyFetcher(should_fail=True))
    failures = []
    worker.failed.connect(lambda t, exc: failures.append(exc))  # type: ignore
    worker.run()
    assert len(failures) == 1 and str(failures[0]) == "boom"


def test_cancelled_worker_stays_silent(qapp):
    orch = LoadOrchestrator()
    ticket = orch.begin("mem://data")
    worker = DatasetLoadWorker(ticket, DummyFetcher("payload"))
    emitted = []
    worker.finished_ok.connect(lambda *a: emitted.append(a))  # type: ignore
    worker.failed.connect(lambda *a: emitted.append(a))  # type: ignore
    worker.cancel()
    worker.run()
    assert emitted == []


def _drain(runner: LoadRunner) -> None:
    for worker in list(runner._workers):
        assert worker.wait(5000)
    QCoreApplication.processEvents()


def test_runner_success(qapp):
    fetcher = DummyFetcher(two_rider_body())
    orch = LoadOrchestrator()
    runner = LoadRunner(orch, fetcher=fetcher)
    ticket = runner.start("mem://data")
    assert orch.state.is_loading
    _drain(runner)
    assert orch.state.is_ready
    assert orch.state.generation == ticket.generation
    assert fetcher.calls == ["mem://data"]


def test_runner_failure(qapp):
    orch = LoadOrchestrator()
    runner = LoadRunner(orch, fetcher=DummyFetcher(should_fail=True))
    runner.start("mem://data")
    _drain(runner)
    assert orch.state.is_error


def test_runner_restart_supersedes_previous(qapp):
    orch = LoadOrchestrator()
    runner = LoadRunner(orch, fetcher=DummyFetcher(two_rider_body()))
    first = runner.start("mem://first")
    second = runner.start("mem://second")
    assert first.token.is_cancelled()
    _drain(runner)
    assert orch.state.is_ready
    assert orch.state.generation == second.generation
    runner.shutdown()
    assert runner._workers == []
