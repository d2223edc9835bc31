"""Completion eligibility rules for a single set."""

from __future__ import annotations

from typing import Mapping

from liftsession.core.state import SetRecord
from liftsession.session.errors import AlreadyCompleted, IncompleteFields, TooEarly
from liftsession.workout.model import TrackingType

# Floor used to reject sets marked complete faster than they could be performed.
MIN_SECONDS_PER_REP = 2

SetKey = tuple[int, int]


def min_active_ms(record: SetRecord, tracking_type: TrackingType) -> int:
    if tracking_type == "duration":
        return (record.duration_sec or 0) * 1000
    return (record.reps or 0) * MIN_SECONDS_PER_REP * 1000


def required_time_ms(
    record: SetRecord,
    tracking_type: TrackingType,
    *,
    exercise_index: int,
    set_index: int,
    completion_times: Mapping[SetKey, int],
    session_start_ms: int | None,
    rest_sec: int,
) -> int:
    """Earliest wall-clock time (ms) at which ``record`` may be completed.

    The reference point is the completion of the previous set of the same
    exercise, then the session start, then the epoch. Before the session has
    started the first set is therefore always early enough.
    """
    previous_ms = completion_times.get((exercise_index, set_index - 1))
    if previous_ms is None:
        previous_ms = session_start_ms if session_start_ms is not None else 0
    return previous_ms + min_active_ms(record, tracking_type) + rest_sec * 1000


def validate_completion(
    record: SetRecord,
    tracking_type: TrackingType,
    *,
    exercise_index: int,
    set_index: int,
    completion_times: Mapping[SetKey, int],
    session_start_ms: int | None,
    rest_sec: int,
    now_ms: int,
) -> None:
    if record.completed:
        raise AlreadyCompleted()

    required_ms = required_time_ms(
        record,
        tracking_type,
        exercise_index=exercise_index,
        set_index=set_index,
        completion_times=completion_times,
        session_start_ms=session_start_ms,
        rest_sec=rest_sec,
    )
    if now_ms < required_ms:
        raise TooEarly(required_ms=required_ms, now_ms=now_ms)

    if not _is_positive(record.weight):
        raise IncompleteFields()
    tracked = record.duration_sec if tracking_type == "duration" else record.reps
    if not _is_positive(tracked):
        raise IncompleteFields()


def _is_positive(value: float | None) -> bool:
    return value is not None and value > 0
