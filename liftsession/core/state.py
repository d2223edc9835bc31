"""Live session state shared between the store and its collaborators."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from liftsession.workout.model import TrackingType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetRecord:
    completed: bool = False
    reps: int | None = None
    duration_sec: int | None = None
    weight: float | None = None


@dataclass(frozen=True)
class ExerciseSession:
    exercise_id: str
    exercise_name: str
    tracking_type: TrackingType
    sets: tuple[SetRecord, ...]

    @property
    def completed_count(self) -> int:
        return sum(1 for record in self.sets if record.completed)


@dataclass
class WorkoutControls:
    """Workout-control flags owned by the screen hosting the session.

    The hosting screen keeps this object alive across navigations; the
    session engine only reads and writes it through these attributes.
    """

    active_routine_id: str | None = None
    is_saving: bool = False

    def start_workout(self, plan_id: str) -> None:
        logger.info("Workout %s started", plan_id)
        self.active_routine_id = plan_id

    def clear(self) -> None:
        self.active_routine_id = None
        self.is_saving = False
