from __future__ import annotations

import threading
import time

import pytest

from timeconductor.domain.interfaces import TickSource
from timeconductor.runtime.clock import RealTimeMasterClock, SteppedMasterClock
from timeconductor.runtime.conductor import EVENT_BOUNDS, TimeConductor
from timeconductor.runtime import tick_sources
from timeconductor.runtime.tick_sources import LatestDataTickSource, LocalClockTickSource
from timeconductor.runtime.time_systems import UTCTimeSystem
from timeconductor.runtime.view_service import ConductorViewService


def test_local_clock_ticks_in_milliseconds():
    clock = SteppedMasterClock(start=2.0)
    source = LocalClockTickSource(clock, sleep_fn=None)
    ticks: list[float] = []
    source.listen(ticks.append)

    assert source.run_once() is True
    clock.advance(0.5)
    source.run_once()

    assert ticks == [pytest.approx(2000.0), pytest.approx(2500.0)]
    assert source.metadata.mode == "realtime"


def test_unlisten_stops_delivery():
    source = LocalClockTickSource(SteppedMasterClock(), sleep_fn=None)
    ticks: list[float] = []
    unlisten = source.listen(ticks.append)

    unlisten()
    unlisten()

    assert source.run_once() is False
    assert ticks == []
    assert source.listener_count == 0


def test_local_clock_rejects_non_positive_interval():
    with pytest.raises(ValueError):
        LocalClockTickSource(SteppedMasterClock(), interval_ms=0)


class DeferredThread:
    """Thread stand-in whose target only runs when the test calls run()."""

    created: list["DeferredThread"] = []

    def __init__(self, target, name=None, daemon=None) -> None:
        self.target = target
        DeferredThread.created.append(self)

    def start(self) -> None:
        pass

    def is_alive(self) -> bool:
        return False

    def join(self, timeout=None) -> None:
        pass

    def run(self) -> None:
        self.target()


def test_stop_before_loop_starts_is_honoured(monkeypatch):
    DeferredThread.created = []
    monkeypatch.setattr(tick_sources, "Thread", DeferredThread)
    source = LocalClockTickSource(SteppedMasterClock(), sleep_fn=None)
    ticks: list[float] = []
    source.listen(ticks.append)

    source.start()
    source.stop()
    # The worker gets scheduled only after stop(); the loop must exit at once
    DeferredThread.created[0].run()

    assert ticks == []


def test_local_clock_thread_ticks_until_stopped():
    source = LocalClockTickSource(RealTimeMasterClock(), interval_ms=5)
    ticked = threading.Event()
    source.listen(lambda _t: ticked.set())

    source.start()
    try:
        assert ticked.wait(timeout=1.0)
    finally:
        source.stop()

    ticked.clear()
    time.sleep(0.05)
    assert not ticked.is_set()


def test_latest_data_drops_out_of_order_values():
    source = LatestDataTickSource()
    ticks: list[float] = []
    source.listen(ticks.append)

    assert source.push(100) is True
    assert source.push(50) is False
    assert source.push(100) is True
    assert source.push(150) is True

    assert ticks == [100, 100, 150]
    assert source.latest == 150
    assert source.metadata.mode == "LAD"


def test_tick_sources_satisfy_protocol():
    assert isinstance(LatestDataTickSource(), TickSource)
    assert isinstance(LocalClockTickSource(SteppedMasterClock(), sleep_fn=None), TickSource)


def test_threaded_ticks_stop_after_switch_to_fixed():
    clock = RealTimeMasterClock()
    source = LocalClockTickSource(clock, interval_ms=5)
    conductor = TimeConductor()
    view = ConductorViewService(conductor, [UTCTimeSystem(clock, [source])])
    updates = threading.Event()
    conductor.on(EVENT_BOUNDS, lambda _b: updates.set())

    view.set_mode("realtime")
    source.start()
    try:
        updates.clear()
        assert updates.wait(timeout=1.0)

        view.set_mode("fixed")
        frozen = conductor.bounds
        time.sleep(0.05)

        assert conductor.bounds == frozen
        assert conductor.follow is False
        assert source.listener_count == 0
    finally:
        source.stop()
