from __future__ import annotations

from pathlib import Path

import pytest

from liftsession.workout.parser import WorkoutParseError, load_workout_plan, plan_from_dict


def test_load_workout_plan_json(tmp_path: Path) -> None:
    plan_file = tmp_path / "push.json"
    plan_file.write_text(
        (
            '{"id":"p-1","name":"Push","notes":"Go heavy","exercises":['
            '{"id":"bench","name":"Bench Press","sets":3,"reps":8},'
            '{"id":"plank","name":"Plank","sets":2,"duration_sec":45,'
            '"tracking_type":"duration"}]}'
        ),
        encoding="utf-8",
    )

    plan = load_workout_plan(plan_file)

    assert plan.plan_id == "p-1"
    assert plan.name == "Push"
    assert plan.notes == "Go heavy"
    assert len(plan.exercises) == 2
    assert plan.exercises[0].tracking_type == "reps"
    assert plan.exercises[0].planned_reps == 8
    assert plan.exercises[1].planned_duration_sec == 45
    assert plan.total_planned_sets == 5


def test_json_without_id_uses_file_stem(tmp_path: Path) -> None:
    plan_file = tmp_path / "legs.json"
    plan_file.write_text(
        '{"exercises":[{"id":"squat","name":"Squat","sets":5,"reps":5}]}',
        encoding="utf-8",
    )

    plan = load_workout_plan(plan_file)

    assert plan.plan_id == "legs"
    assert plan.name == "legs"
    assert plan.notes is None


def test_load_workout_plan_csv(tmp_path: Path) -> None:
    plan_file = tmp_path / "pull.csv"
    plan_file.write_text(
        "exercise_id,name,sets,reps,duration_sec,tracking_type\n"
        "row,Barbell Row,4,10,,reps\n"
        "hang,Dead Hang,2,,30,duration\n",
        encoding="utf-8",
    )

    plan = load_workout_plan(plan_file)

    assert plan.name == "pull"
    assert [e.exercise_id for e in plan.exercises] == ["row", "hang"]
    assert plan.exercises[0].planned_duration_sec is None
    assert plan.exercises[1].tracking_type == "duration"
    assert plan.exercises[1].planned_reps is None


def test_plan_from_dict_slugs_missing_id() -> None:
    plan = plan_from_dict(
        {"name": "Full Body #2", "exercises": [{"id": 7, "name": "Dip", "sets": "3"}]}
    )

    assert plan.plan_id == "full-body-2"
    assert plan.exercises[0].exercise_id == "7"
    assert plan.exercises[0].planned_sets == 3


def test_load_workout_plan_invalid_extension(tmp_path: Path) -> None:
    plan_file = tmp_path / "plan.txt"
    plan_file.write_text("hello", encoding="utf-8")

    with pytest.raises(WorkoutParseError):
        load_workout_plan(plan_file)


@pytest.mark.parametrize(
    "exercise",
    [
        {"id": "a", "name": "A", "sets": 0},
        {"id": "a", "name": "A", "sets": "three"},
        {"id": "a", "name": "", "sets": 1},
        {"id": "a", "name": "A", "sets": 1, "reps": -2},
        {"id": "a", "name": "A", "sets": 1, "tracking_type": "distance"},
    ],
)
def test_invalid_exercise_rows(exercise: dict[str, object]) -> None:
    with pytest.raises(WorkoutParseError):
        plan_from_dict({"name": "Bad", "exercises": [exercise]})


def test_plan_needs_exercises() -> None:
    with pytest.raises(WorkoutParseError):
        plan_from_dict({"name": "Empty", "exercises": []})
