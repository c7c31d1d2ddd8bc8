"""Dedicated launcher module for `python -m gui` or external callers.

Wires the dashboard together: event bus, load orchestrator, view model,
window and the threaded load runner. The first load starts as soon as the
window is shown.
"""

from __future__ import annotations

import logging
import sys

from config import settings

log = logging.getLogger(__name__)


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(source: str | None = None) -> int:  # pragma: no cover - runtime
    configure_logging()
    from PyQt6.QtWidgets import QApplication

    from gui.services.event_bus import EventBus
    from gui.services.load_orchestrator import LoadOrchestrator
    from gui.services.load_runner import LoadRunner
    from gui.viewmodels.dashboard_viewmodel import DashboardViewModel
    from gui.views.dashboard_view import DashboardWindow

    app = QApplication.instance() or QApplication(sys.argv)
    bus = EventBus()
    orchestrator = LoadOrchestrator()
    runner = LoadRunner(orchestrator)
    vm = DashboardViewModel(orchestrator)
    win = DashboardWindow(vm, runner, event_bus=bus, source=source or settings.DATA_URL)
    log.info("Loading rider data from %s", source or settings.DATA_URL)
    win.show()
    win.reload()
    code = app.exec()
    runner.shutdown()
    return code


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
