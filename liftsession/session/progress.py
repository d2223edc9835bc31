"""Session progress derived from the current sets."""

from __future__ import annotations

import math
from typing import Iterable

from liftsession.core.state import ExerciseSession


def count_sets(exercise_sessions: Iterable[ExerciseSession]) -> tuple[int, int]:
    completed = 0
    total = 0
    for exercise in exercise_sessions:
        completed += exercise.completed_count
        total += len(exercise.sets)
    return completed, total


def progress_percentage(exercise_sessions: Iterable[ExerciseSession]) -> int:
    completed, total = count_sets(exercise_sessions)
    if total == 0 or completed == 0:
        return 0
    if completed >= total:
        return 100
    # Half-up rounding, kept off 0 and 100 while the workout is partial.
    pct = int(math.floor(completed * 100 / total + 0.5))
    return min(99, max(1, pct))
