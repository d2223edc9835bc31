from __future__ import annotations

import pytest

from liftsession.session.rest_timer import RestTimer


def test_countdown_runs_to_idle_and_reports_once() -> None:
    finishes: list[bool] = []
    timer = RestTimer(on_finish=finishes.append)

    timer.start(30)
    assert timer.is_active
    assert timer.remaining_sec == 30

    for _ in range(30):
        timer.tick()

    assert not timer.is_active
    assert timer.remaining_sec == 0
    assert finishes == [True]

    timer.tick()
    assert finishes == [True]
    assert timer.configured_sec == 30


def test_skip_reports_distinct_outcome() -> None:
    finishes: list[bool] = []
    timer = RestTimer(on_finish=finishes.append)

    timer.skip()
    assert finishes == []

    timer.start(45)
    timer.tick()
    timer.skip()

    assert not timer.is_active
    assert timer.remaining_sec == 0
    assert timer.configured_sec == 45
    assert finishes == [False]


def test_restart_replaces_running_countdown() -> None:
    timer = RestTimer()
    timer.start(10)
    for _ in range(4):
        timer.tick()

    timer.start(20)

    assert timer.is_active
    assert timer.remaining_sec == 20
    assert timer.configured_sec == 20


def test_zero_rest_finishes_immediately() -> None:
    finishes: list[bool] = []
    timer = RestTimer(on_finish=finishes.append)

    timer.start(0)

    assert not timer.is_active
    assert finishes == [True]


def test_negative_rest_is_rejected() -> None:
    timer = RestTimer()
    with pytest.raises(ValueError):
        timer.start(-5)
    assert not timer.is_active


def test_reset_is_silent() -> None:
    finishes: list[bool] = []
    timer = RestTimer(on_finish=finishes.append)
    timer.start(15)

    timer.reset()

    assert not timer.is_active
    assert timer.configured_sec == 0
    assert finishes == []
