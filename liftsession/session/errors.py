"""Recoverable session errors.

Each error carries the message shown to the user by default, so callers can
report ``str(exc)`` straight through their notification channel.
"""

from __future__ import annotations


class WorkoutSessionError(Exception):
    default_message = "Workout session error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class MinimumSetViolation(WorkoutSessionError):
    default_message = "At least one set is required."

    def __init__(self, exercise_name: str | None = None) -> None:
        self.exercise_name = exercise_name
        if exercise_name:
            super().__init__(
                f"Cannot remove. At least one set is required for {exercise_name}."
            )
        else:
            super().__init__()


class AlreadyCompleted(WorkoutSessionError):
    default_message = "This set is already completed and cannot be unchecked."


class TooEarly(WorkoutSessionError):
    default_message = (
        "Please complete the required exercise duration or repetitions first."
    )

    def __init__(self, required_ms: int, now_ms: int) -> None:
        self.required_ms = required_ms
        self.now_ms = now_ms
        super().__init__()

    @property
    def wait_ms(self) -> int:
        return max(0, self.required_ms - self.now_ms)


class IncompleteFields(WorkoutSessionError):
    default_message = "Please fill in all fields before marking the set as completed"


class NothingToSave(WorkoutSessionError):
    default_message = "You need to complete at least one set to save the workout."


class SaveFailed(WorkoutSessionError):
    default_message = "Failed to save workout"
