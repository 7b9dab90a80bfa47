from __future__ import annotations

import pytest

from memory_game.scheduler import ManualScheduler


def test_callbacks_fire_in_due_order() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    scheduler.call_later(2.0, lambda: fired.append("late"))
    scheduler.call_later(1.0, lambda: fired.append("early"))
    scheduler.call_later(1.0, lambda: fired.append("early-second"))

    assert scheduler.advance(2.0) == 3
    assert fired == ["early", "early-second", "late"]
    assert scheduler.now() == 2.0


def test_cancelled_call_never_fires() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    call = scheduler.call_later(1.0, lambda: fired.append(1))

    call.cancel()

    assert scheduler.pending == 0
    assert scheduler.advance(5.0) == 0
    assert fired == []


def test_clock_reads_due_time_inside_callback() -> None:
    scheduler = ManualScheduler(start=10.0)
    seen: list[float] = []
    scheduler.call_later(1.5, lambda: seen.append(scheduler.now()))

    scheduler.advance(4.0)

    assert seen == [11.5]
    assert scheduler.now() == 14.0


def test_callbacks_can_reschedule_within_window() -> None:
    scheduler = ManualScheduler()
    fired: list[float] = []

    def _tick() -> None:
        fired.append(scheduler.now())
        scheduler.call_later(1.0, _tick)

    scheduler.call_later(1.0, _tick)
    scheduler.advance(3.0)

    assert fired == [1.0, 2.0, 3.0]


def test_run_pending_fires_zero_delay_calls() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    scheduler.call_later(0.0, lambda: fired.append(1))

    assert scheduler.run_pending() == 1
    assert fired == [1]


def test_negative_values_are_rejected() -> None:
    scheduler = ManualScheduler()

    with pytest.raises(ValueError):
        scheduler.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1.0)
