"""Workout plan models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


TrackingType = Literal["reps", "duration"]
TRACKING_TYPES: tuple[TrackingType, ...] = ("reps", "duration")


@dataclass(frozen=True)
class PlannedExercise:
    exercise_id: str
    name: str
    planned_sets: int
    tracking_type: TrackingType = "reps"
    planned_reps: int | None = None
    planned_duration_sec: int | None = None


@dataclass(frozen=True)
class WorkoutPlan:
    plan_id: str
    name: str
    exercises: tuple[PlannedExercise, ...]
    notes: str | None = None

    @property
    def total_planned_sets(self) -> int:
        return sum(exercise.planned_sets for exercise in self.exercises)
