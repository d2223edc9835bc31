"""Completion payload and end-of-session transitions."""

from __future__ import annotations

import inspect
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Optional, cast

from liftsession.core.state import WorkoutControls
from liftsession.session.errors import NothingToSave, SaveFailed
from liftsession.session.rest_timer import RestTimer
from liftsession.session.store import SessionStore
from liftsession.workout.model import TrackingType, WorkoutPlan

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayloadSet:
    reps: int | None
    weight: float | None
    duration_sec: int | None
    completed: bool


@dataclass(frozen=True)
class PayloadExercise:
    exercise_id: str
    tracking_type: TrackingType
    sets: tuple[PayloadSet, ...]


@dataclass(frozen=True)
class CompletionPayload:
    name: str
    date: str
    duration_sec: int
    workout_plan_id: str
    exercises: tuple[PayloadExercise, ...]

    @property
    def set_count(self) -> int:
        return sum(len(exercise.sets) for exercise in self.exercises)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CompletionPayload:
        return cls(
            name=str(data["name"]),
            date=str(data["date"]),
            duration_sec=int(data["duration_sec"]),
            workout_plan_id=str(data["workout_plan_id"]),
            exercises=tuple(
                PayloadExercise(
                    exercise_id=str(item["exercise_id"]),
                    tracking_type=cast(TrackingType, item["tracking_type"]),
                    sets=tuple(PayloadSet(**raw) for raw in item["sets"]),
                )
                for item in data["exercises"]
            ),
        )


SaveWorkout = Callable[[CompletionPayload], Awaitable[bool] | bool]


def build_completion_payload(
    store: SessionStore,
    plan: WorkoutPlan,
    now: Optional[datetime] = None,
) -> CompletionPayload:
    exercises: list[PayloadExercise] = []
    for exercise in store.exercise_sessions:
        done = tuple(
            PayloadSet(
                reps=record.reps,
                weight=record.weight,
                duration_sec=record.duration_sec,
                completed=record.completed,
            )
            for record in exercise.sets
            if record.completed
        )
        if not done:
            continue
        exercises.append(
            PayloadExercise(
                exercise_id=exercise.exercise_id,
                tracking_type=exercise.tracking_type,
                sets=done,
            )
        )

    if not exercises:
        raise NothingToSave()

    finished_at = now or datetime.now(tz=timezone.utc)
    return CompletionPayload(
        name=plan.name,
        date=finished_at.isoformat(),
        duration_sec=store.elapsed_duration_sec,
        workout_plan_id=plan.plan_id,
        exercises=tuple(exercises),
    )


class SessionFinalizer:
    def __init__(
        self,
        store: SessionStore,
        rest_timer: RestTimer,
        controls: WorkoutControls,
    ) -> None:
        self._store = store
        self._rest_timer = rest_timer
        self._controls = controls

    def cancel(self) -> None:
        logger.info("Workout discarded")
        self._clear()

    def build_completion_payload(
        self,
        plan: WorkoutPlan,
        now: Optional[datetime] = None,
    ) -> CompletionPayload:
        return build_completion_payload(self._store, plan, now)

    async def submit(self, payload: CompletionPayload, save: SaveWorkout) -> None:
        """Hand ``payload`` to ``save`` and clear the session once it succeeded."""
        self._controls.is_saving = True
        try:
            try:
                result = save(payload)
                if inspect.isawaitable(result):
                    result = await result
            except Exception as exc:
                logger.warning("Saving workout %s raised: %s", payload.workout_plan_id, exc)
                raise SaveFailed("An error occurred while saving the workout") from exc
            if not result:
                logger.warning("Saving workout %s was rejected", payload.workout_plan_id)
                raise SaveFailed()
        finally:
            self._controls.is_saving = False

        logger.info(
            "Workout %s saved with %d sets",
            payload.workout_plan_id,
            payload.set_count,
        )
        self._clear()

    def _clear(self) -> None:
        self._store.reset()
        self._rest_timer.reset()
        self._controls.clear()
