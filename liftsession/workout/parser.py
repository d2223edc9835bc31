"""Workout plan parser (CSV/JSON)."""

from __future__ import annotations

import csv
import json
import re
from pathlib import Path
from typing import cast

from liftsession.workout.model import (
    TRACKING_TYPES,
    PlannedExercise,
    TrackingType,
    WorkoutPlan,
)


class WorkoutParseError(ValueError):
    """Raised when a workout plan is invalid."""


def load_workout_plan(path: str | Path) -> WorkoutPlan:
    file_path = Path(path)
    suffix = file_path.suffix.lower()
    if suffix == ".json":
        return _load_json(file_path)
    if suffix == ".csv":
        return _load_csv(file_path)
    raise WorkoutParseError(
        f"Unsupported workout format '{file_path.suffix}'. Use .json or .csv"
    )


def plan_from_dict(data: object, *, default_name: str = "Workout") -> WorkoutPlan:
    """Build a plan from already-decoded plan data (API payloads, JSON files)."""
    if not isinstance(data, dict):
        raise WorkoutParseError("Workout plan must be an object")

    name_obj = data.get("name", default_name)
    if not isinstance(name_obj, str):
        raise WorkoutParseError("Workout field 'name' must be a string")
    name = name_obj.strip() or default_name

    notes_obj = data.get("notes")
    if notes_obj is not None and not isinstance(notes_obj, str):
        raise WorkoutParseError("Workout field 'notes' must be a string")

    exercises_obj = data.get("exercises")
    if not isinstance(exercises_obj, list):
        raise WorkoutParseError("Workout field 'exercises' must be an array")

    exercises: list[PlannedExercise] = []
    for i, raw in enumerate(exercises_obj):
        if not isinstance(raw, dict):
            raise WorkoutParseError(f"Exercise {i + 1}: must be an object")
        exercises.append(
            _build_exercise(
                id_obj=raw.get("id"),
                name_obj=raw.get("name"),
                sets_obj=raw.get("sets"),
                reps_obj=raw.get("reps"),
                duration_obj=raw.get("duration_sec"),
                tracking_obj=raw.get("tracking_type"),
                index=i,
            )
        )

    plan_id = data.get("id")
    return _build_plan(
        plan_id=str(plan_id) if plan_id is not None else _slug(name),
        name=name,
        notes=(notes_obj or "").strip() or None,
        exercises=exercises,
    )


def _load_json(path: Path) -> WorkoutPlan:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise WorkoutParseError(f"Invalid JSON: {exc}") from exc
    if isinstance(data, dict) and "id" not in data:
        data = {**data, "id": path.stem}
    return plan_from_dict(data, default_name=path.stem)


def _load_csv(path: Path) -> WorkoutPlan:
    rows: list[PlannedExercise] = []
    with path.open("r", encoding="utf-8", newline="") as handle:
        reader = csv.DictReader(handle)
        fields = set(reader.fieldnames or [])
        required = {"exercise_id", "name", "sets"}
        if not required.issubset(fields):
            raise WorkoutParseError(
                "CSV must contain headers: exercise_id,name,sets[,reps,"
                "duration_sec,tracking_type]"
            )

        for i, row in enumerate(reader):
            rows.append(
                _build_exercise(
                    id_obj=row.get("exercise_id"),
                    name_obj=row.get("name"),
                    sets_obj=row.get("sets"),
                    reps_obj=row.get("reps"),
                    duration_obj=row.get("duration_sec"),
                    tracking_obj=row.get("tracking_type"),
                    index=i,
                )
            )

    return _build_plan(plan_id=path.stem, name=path.stem, notes=None, exercises=rows)


def _build_exercise(
    *,
    id_obj: object,
    name_obj: object,
    sets_obj: object,
    reps_obj: object,
    duration_obj: object,
    tracking_obj: object,
    index: int,
) -> PlannedExercise:
    if id_obj is None or str(id_obj).strip() == "":
        raise WorkoutParseError(f"Exercise {index + 1}: missing id")
    if name_obj is None or str(name_obj).strip() == "":
        raise WorkoutParseError(f"Exercise {index + 1}: missing name")

    planned_sets = _parse_int_field(raw=sets_obj, field_name="sets", index=index)
    if planned_sets <= 0:
        raise WorkoutParseError(f"Exercise {index + 1}: sets must be > 0")

    planned_reps = _parse_optional_int_field(
        raw=reps_obj,
        field_name="reps",
        index=index,
    )
    planned_duration_sec = _parse_optional_int_field(
        raw=duration_obj,
        field_name="duration_sec",
        index=index,
    )
    if planned_reps is not None and planned_reps <= 0:
        raise WorkoutParseError(f"Exercise {index + 1}: reps must be > 0")
    if planned_duration_sec is not None and planned_duration_sec <= 0:
        raise WorkoutParseError(f"Exercise {index + 1}: duration_sec must be > 0")

    tracking_type = _parse_tracking_type(tracking_obj, index=index)

    return PlannedExercise(
        exercise_id=str(id_obj).strip(),
        name=str(name_obj).strip(),
        planned_sets=planned_sets,
        tracking_type=tracking_type,
        planned_reps=planned_reps,
        planned_duration_sec=planned_duration_sec,
    )


def _build_plan(
    *,
    plan_id: str,
    name: str,
    notes: str | None,
    exercises: list[PlannedExercise],
) -> WorkoutPlan:
    if not exercises:
        raise WorkoutParseError("Workout must contain at least one exercise")
    return WorkoutPlan(
        plan_id=plan_id,
        name=name,
        exercises=tuple(exercises),
        notes=notes,
    )


def _parse_tracking_type(raw: object, *, index: int) -> TrackingType:
    if raw is None or (isinstance(raw, str) and raw.strip() == ""):
        return "reps"
    value = str(raw).strip().lower()
    if value not in TRACKING_TYPES:
        raise WorkoutParseError(
            f"Exercise {index + 1}: tracking_type must be one of "
            f"{', '.join(TRACKING_TYPES)}"
        )
    return cast(TrackingType, value)


def _parse_int_field(*, raw: object, field_name: str, index: int) -> int:
    if raw is None:
        raise WorkoutParseError(f"Exercise {index + 1}: invalid {field_name}")
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise WorkoutParseError(f"Exercise {index + 1}: invalid {field_name}") from exc


def _parse_optional_int_field(
    *, raw: object, field_name: str, index: int
) -> int | None:
    if raw is None:
        return None
    if isinstance(raw, str) and raw.strip() == "":
        return None
    return _parse_int_field(raw=raw, field_name=field_name, index=index)


def _slug(name: str) -> str:
    s = re.sub(r"[^a-zA-Z0-9]+", "-", name.strip().lower()).strip("-")
    return s or "workout"
