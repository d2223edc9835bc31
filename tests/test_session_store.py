from __future__ import annotations

import pytest

from liftsession.session.errors import (
    AlreadyCompleted,
    IncompleteFields,
    MinimumSetViolation,
    TooEarly,
)
from liftsession.session.progress import progress_percentage
from liftsession.session.store import SessionStore
from liftsession.workout.model import PlannedExercise, WorkoutPlan


def _plan() -> WorkoutPlan:
    return WorkoutPlan(
        plan_id="plan-1",
        name="Push Day",
        exercises=(
            PlannedExercise("bench", "Bench Press", 2, "reps", planned_reps=10),
            PlannedExercise("plank", "Plank", 1, "duration", planned_duration_sec=30),
        ),
    )


def test_initialize_builds_default_sets() -> None:
    store = SessionStore()

    assert store.initialize(_plan())

    bench, plank = store.exercise_sessions
    assert bench.exercise_name == "Bench Press"
    assert len(bench.sets) == 2
    assert all(not s.completed and s.reps == 10 and s.weight is None for s in bench.sets)
    assert plank.tracking_type == "duration"
    assert plank.sets[0].duration_sec == 30
    assert store.start_time_ms is None


def test_initialize_is_noop_while_session_active() -> None:
    store = SessionStore()
    store.initialize(_plan())
    store.record_field_edit(0, 0, "weight", 50)
    store.complete_set(0, 0, now_ms=1_000_000)

    other = WorkoutPlan("plan-2", "Legs", (PlannedExercise("squat", "Squat", 5),))
    assert not store.initialize(other)
    assert store.exercise_sessions[0].exercise_id == "bench"
    assert store.exercise_sessions[0].sets[0].completed


def test_reps_scenario_from_fields_to_progress() -> None:
    store = SessionStore()
    store.initialize(
        WorkoutPlan("p", "Plan", (PlannedExercise("row", "Row", 2, "reps", planned_reps=10),))
    )
    assert len(store.exercise_sessions[0].sets) == 2

    with pytest.raises(IncompleteFields):
        store.complete_set(0, 0, now_ms=1_000_000)

    store.record_field_edit(0, 0, "weight", 50)
    with pytest.raises(TooEarly) as excinfo:
        store.complete_set(0, 0, now_ms=19_999)
    assert excinfo.value.required_ms == 20_000
    assert excinfo.value.wait_ms == 1

    assert store.complete_set(0, 0, now_ms=20_000)
    assert store.start_time_ms == 20_000
    assert store.exercise_sessions[0].sets[0].completed
    assert progress_percentage(store.exercise_sessions) == 50


def test_complete_set_twice_keeps_timestamps() -> None:
    store = SessionStore()
    store.initialize(_plan())
    store.record_field_edit(0, 0, "weight", 40)
    store.complete_set(0, 0, now_ms=1_000_000)
    before = dict(store.completion_times)

    with pytest.raises(AlreadyCompleted):
        store.complete_set(0, 0, now_ms=2_000_000)

    assert dict(store.completion_times) == before
    assert store.start_time_ms == 1_000_000


def test_next_set_waits_for_previous_completion_and_rest() -> None:
    store = SessionStore()
    store.initialize(_plan())
    store.record_field_edit(0, 0, "weight", 40)
    store.record_field_edit(0, 1, "weight", 40)
    store.complete_set(0, 0, now_ms=1_000_000)

    # 10 reps at 2s each plus a 60s rest.
    with pytest.raises(TooEarly):
        store.complete_set(0, 1, now_ms=1_079_999, rest_sec=60)
    assert not store.complete_set(0, 1, now_ms=1_080_000, rest_sec=60)
    assert store.completion_times[(0, 1)] == 1_080_000


def test_first_set_of_later_exercise_measures_from_session_start() -> None:
    store = SessionStore()
    store.initialize(_plan())
    store.record_field_edit(0, 0, "weight", 40)
    store.complete_set(0, 0, now_ms=1_000_000)
    store.record_field_edit(1, 0, "weight", 10)

    with pytest.raises(TooEarly):
        store.complete_set(1, 0, now_ms=1_029_999)
    store.complete_set(1, 0, now_ms=1_030_000)


def test_remove_last_set_respects_minimum() -> None:
    store = SessionStore()
    store.initialize(_plan())
    plank_sets = store.exercise_sessions[1].sets

    with pytest.raises(MinimumSetViolation) as excinfo:
        store.remove_last_set(1)

    assert store.exercise_sessions[1].sets == plank_sets
    assert "Plank" in str(excinfo.value)


def test_append_and_remove_keep_at_least_one_set() -> None:
    store = SessionStore()
    store.initialize(_plan())

    for _ in range(3):
        store.append_set(1)
    for _ in range(5):
        try:
            store.remove_last_set(1)
        except MinimumSetViolation:
            pass
        total = sum(len(e.sets) for e in store.exercise_sessions)
        assert total >= len(store.exercise_sessions)

    assert len(store.exercise_sessions[1].sets) == 1


def test_appended_set_uses_plan_defaults() -> None:
    store = SessionStore()
    store.initialize(_plan())
    store.record_field_edit(0, 1, "reps", 6)
    store.record_field_edit(0, 1, "weight", 70)

    added = store.append_set(0)

    assert added.reps == 10
    assert added.weight is None
    assert not added.completed
    assert store.exercise_sessions[0].sets[-1] == added


def test_mutations_copy_on_write() -> None:
    store = SessionStore()
    store.initialize(_plan())
    snapshot = store.exercise_sessions
    bench_before = snapshot[0]
    plank_before = snapshot[1]

    store.record_field_edit(0, 1, "weight", 55.5)

    assert store.exercise_sessions is not snapshot
    assert snapshot[0] is bench_before
    assert bench_before.sets[1].weight is None
    assert store.exercise_sessions[0].sets[1].weight == 55.5
    assert store.exercise_sessions[0].sets[0] is bench_before.sets[0]
    assert store.exercise_sessions[1] is plank_before


def test_edits_to_completed_set_are_ignored() -> None:
    store = SessionStore()
    store.initialize(_plan())
    store.record_field_edit(0, 0, "weight", 40)
    store.complete_set(0, 0, now_ms=1_000_000)

    assert not store.record_field_edit(0, 0, "weight", 90)
    assert store.exercise_sessions[0].sets[0].weight == 40


def test_record_field_edit_rejects_unknown_field_and_index() -> None:
    store = SessionStore()
    store.initialize(_plan())

    with pytest.raises(ValueError):
        store.record_field_edit(0, 0, "tempo", 3)  # type: ignore[arg-type]
    with pytest.raises(IndexError):
        store.record_field_edit(0, 5, "weight", 3)
    with pytest.raises(IndexError):
        store.append_set(7)


def test_reset_clears_everything() -> None:
    store = SessionStore()
    store.initialize(_plan())
    store.record_field_edit(0, 0, "weight", 40)
    store.complete_set(0, 0, now_ms=1_000_000)
    store.elapsed_duration_sec = 95

    store.reset()

    assert store.exercise_sessions == ()
    assert store.start_time_ms is None
    assert store.elapsed_duration_sec == 0
    assert dict(store.completion_times) == {}
    assert store.plan is None
    assert store.initialize(_plan())


def test_fractional_reps_and_duration_round_half_up() -> None:
    store = SessionStore()
    store.initialize(_plan())

    store.record_field_edit(0, 0, "reps", 2.7)
    store.record_field_edit(0, 1, "reps", 2.5)
    store.record_field_edit(1, 0, "duration", 44.4)

    assert store.exercise_sessions[0].sets[0].reps == 3
    assert store.exercise_sessions[0].sets[1].reps == 3
    assert store.exercise_sessions[1].sets[0].duration_sec == 44
