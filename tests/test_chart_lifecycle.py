"""ChartLifecycleManager: at most one live chart per surface."""

from __future__ import annotations

from gui.charting.config_builder import build_config, gradient_specs
from gui.charting.lifecycle import ChartLifecycleManager
from gui.charting.palette import derive_palette
from gui.services.event_bus import EventBus, GUIEvent
from tests.factories import two_rider_dataset


class FakeChart:
    def __init__(self, log, surface_id, config):
        self.log = log
        self.surface_id = surface_id
        self.config = config
        self.disposed = False
        log.append(("create", surface_id))

    def dispose(self):
        self.disposed = True
        self.log.append(("dispose", self.surface_id))


def _manager(bus=None):
    log = []
    mgr = ChartLifecycleManager(lambda sid, cfg: FakeChart(log, sid, cfg), event_bus=bus)
    return mgr, log


def _config(**kwargs):
    ds = two_rider_dataset(**kwargs)
    palette = derive_palette(ds)
    return build_config(ds.metric("grandTours"), ds.subjects_in_order(), palette, gradient_specs(palette))


def test_first_sync_creates_instance():
    mgr, log = _manager()
    assert mgr.sync("grandTours", _config()) is True
    assert log == [("create", "grandTours")]
    assert mgr.live_count() == 1
    assert mgr.instance("grandTours").config == _config()


def test_equal_config_is_a_no_op():
    mgr, log = _manager()
    mgr.sync("grandTours", _config())
    first = mgr.instance("grandTours")
    assert mgr.sync("grandTours", _config()) is False
    assert mgr.instance("grandTours") is first
    assert log == [("create", "grandTours")]
    assert mgr.created == 1 and mgr.disposed == 0


def test_changed_config_disposes_before_create():
    mgr, log = _manager()
    mgr.sync("grandTours", _config(a=5))
    old = mgr.instance("grandTours")
    assert mgr.sync("grandTours", _config(a=4)) is True
    assert old.disposed is True
    assert log == [("create", "grandTours"), ("dispose", "grandTours"), ("create", "grandTours")]
    assert mgr.live_count() == 1


def test_none_config_tears_down():
    mgr, log = _manager()
    assert mgr.sync("grandTours", None) is False
    mgr.sync("grandTours", _config())
    assert mgr.sync("grandTours", None) is True
    assert mgr.live_count() == 0
    assert mgr.instance("grandTours") is None
    assert log[-1] == ("dispose", "grandTours")


def test_surfaces_are_independent_and_dispose_all():
    mgr, _ = _manager()
    mgr.sync("one", _config(a=1))
    mgr.sync("two", _config(a=2))
    assert sorted(mgr.surfaces()) == ["one", "two"]
    mgr.dispose_all()
    assert mgr.live_count() == 0
    assert mgr.disposed == 2


def test_chart_created_events_published():
    bus = EventBus()
    seen = []
    bus.subscribe(GUIEvent.CHART_CREATED, lambda e: seen.append(("created", e.payload)))
    mgr, _ = _manager(bus)
    mgr.sync("grandTours", _config(a=1))
    mgr.sync("grandTours", _config(a=2))
    assert seen == [
        ("created", "grandTours"),
        ("created", "grandTours"),
    ]
