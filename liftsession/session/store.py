"""In-memory state of the workout being performed."""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from types import MappingProxyType
from typing import Literal, Mapping

from liftsession.core.state import ExerciseSession, SetRecord
from liftsession.session.errors import MinimumSetViolation
from liftsession.session.validator import SetKey, validate_completion
from liftsession.workout.model import PlannedExercise, WorkoutPlan

logger = logging.getLogger(__name__)

SetField = Literal["weight", "reps", "duration"]

_FIELD_ATTRS: dict[str, str] = {
    "weight": "weight",
    "reps": "reps",
    "duration": "duration_sec",
}


def default_set(planned: PlannedExercise) -> SetRecord:
    return SetRecord(
        completed=False,
        reps=planned.planned_reps,
        duration_sec=planned.planned_duration_sec,
        weight=None,
    )


class SessionStore:
    """Single source of truth for the live session.

    Mutations never modify published objects: each one swaps in a new
    ``exercise_sessions`` tuple holding a new ``ExerciseSession`` and
    ``SetRecord`` along the edited path, while siblings are shared by
    reference. Readers holding an older snapshot keep a consistent view.
    """

    def __init__(self) -> None:
        self.exercise_sessions: tuple[ExerciseSession, ...] = ()
        self.start_time_ms: int | None = None
        self.elapsed_duration_sec: int = 0
        self._completion_times: dict[SetKey, int] = {}
        self._plan: WorkoutPlan | None = None

    @property
    def plan(self) -> WorkoutPlan | None:
        return self._plan

    @property
    def is_active(self) -> bool:
        return self.start_time_ms is not None

    @property
    def completion_times(self) -> Mapping[SetKey, int]:
        return MappingProxyType(self._completion_times)

    @property
    def has_incomplete_sets(self) -> bool:
        return any(
            not record.completed
            for exercise in self.exercise_sessions
            for record in exercise.sets
        )

    def initialize(self, plan: WorkoutPlan) -> bool:
        if self.is_active:
            logger.debug("Session already active, keeping it over plan %s", plan.plan_id)
            return False
        self._plan = plan
        self.exercise_sessions = tuple(
            ExerciseSession(
                exercise_id=planned.exercise_id,
                exercise_name=planned.name,
                tracking_type=planned.tracking_type,
                sets=tuple(default_set(planned) for _ in range(planned.planned_sets)),
            )
            for planned in plan.exercises
        )
        self._completion_times = {}
        self.elapsed_duration_sec = 0
        logger.debug(
            "Initialized session for plan %s with %d exercises",
            plan.plan_id,
            len(self.exercise_sessions),
        )
        return True

    def record_field_edit(
        self,
        exercise_index: int,
        set_index: int,
        field: SetField,
        value: float | None,
    ) -> bool:
        attr = _FIELD_ATTRS.get(field)
        if attr is None:
            raise ValueError(f"Unknown set field '{field}'")
        exercise = self._exercise(exercise_index)
        record = self._set(exercise, set_index)
        if record.completed:
            logger.debug(
                "Ignoring %s edit on completed set %d/%d",
                field,
                exercise_index,
                set_index,
            )
            return False
        if attr in ("reps", "duration_sec") and value is not None:
            # Counts and seconds are whole numbers; round half-up.
            value = int(math.floor(value + 0.5))
        self._replace_set(exercise_index, set_index, replace(record, **{attr: value}))
        return True

    def append_set(self, exercise_index: int) -> SetRecord:
        exercise = self._exercise(exercise_index)
        record = default_set(self._planned(exercise_index))
        self._replace_exercise(
            exercise_index, replace(exercise, sets=exercise.sets + (record,))
        )
        return record

    def remove_last_set(self, exercise_index: int) -> SetRecord:
        exercise = self._exercise(exercise_index)
        if len(exercise.sets) <= 1:
            raise MinimumSetViolation(exercise.exercise_name)
        removed = exercise.sets[-1]
        self._replace_exercise(exercise_index, replace(exercise, sets=exercise.sets[:-1]))
        return removed

    def complete_set(
        self,
        exercise_index: int,
        set_index: int,
        now_ms: int,
        rest_sec: int = 0,
    ) -> bool:
        """Mark a set completed; returns True when this started the session."""
        exercise = self._exercise(exercise_index)
        record = self._set(exercise, set_index)
        validate_completion(
            record,
            exercise.tracking_type,
            exercise_index=exercise_index,
            set_index=set_index,
            completion_times=self._completion_times,
            session_start_ms=self.start_time_ms,
            rest_sec=rest_sec,
            now_ms=now_ms,
        )

        self._replace_set(exercise_index, set_index, replace(record, completed=True))
        self._completion_times = {
            **self._completion_times,
            (exercise_index, set_index): now_ms,
        }
        started = self.start_time_ms is None
        if started:
            self.start_time_ms = now_ms
            logger.info("Session started at %d", now_ms)
        return started

    def reset(self) -> None:
        self.exercise_sessions = ()
        self.start_time_ms = None
        self.elapsed_duration_sec = 0
        self._completion_times = {}
        self._plan = None

    def exercise_at(self, exercise_index: int) -> ExerciseSession:
        return self._exercise(exercise_index)

    def _exercise(self, exercise_index: int) -> ExerciseSession:
        if exercise_index < 0 or exercise_index >= len(self.exercise_sessions):
            raise IndexError(f"Invalid exercise index {exercise_index}")
        return self.exercise_sessions[exercise_index]

    def _set(self, exercise: ExerciseSession, set_index: int) -> SetRecord:
        if set_index < 0 or set_index >= len(exercise.sets):
            raise IndexError(f"Invalid set index {set_index}")
        return exercise.sets[set_index]

    def _planned(self, exercise_index: int) -> PlannedExercise:
        if self._plan is None:
            raise RuntimeError("Session store is not initialized")
        return self._plan.exercises[exercise_index]

    def _replace_exercise(self, exercise_index: int, exercise: ExerciseSession) -> None:
        sessions = list(self.exercise_sessions)
        sessions[exercise_index] = exercise
        self.exercise_sessions = tuple(sessions)

    def _replace_set(self, exercise_index: int, set_index: int, record: SetRecord) -> None:
        exercise = self.exercise_sessions[exercise_index]
        sets = list(exercise.sets)
        sets[set_index] = record
        self._replace_exercise(exercise_index, replace(exercise, sets=tuple(sets)))
