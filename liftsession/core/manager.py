"""Event handlers driving a workout session from a UI."""

from __future__ import annotations

import time
from typing import Callable, Literal, Optional

from liftsession.core.state import ExerciseSession, WorkoutControls
from liftsession.session.errors import WorkoutSessionError
from liftsession.session.finalizer import CompletionPayload, SaveWorkout, SessionFinalizer
from liftsession.session.progress import progress_percentage
from liftsession.session.rest_timer import RestTimer
from liftsession.session.store import SessionStore, SetField
from liftsession.workout.model import WorkoutPlan

NoticeKind = Literal["positive", "negative", "info"]
Notify = Callable[[str, NoticeKind], None]
Confirm = Callable[[str], bool]

DEFAULT_REST_SEC = 60

CONFIRM_CANCEL = "Are you sure you want to cancel the workout? This cannot be undone."
CONFIRM_INCOMPLETE = (
    "There are incomplete sets. These will not be saved. Do you want to proceed?"
)


def now_ms() -> int:
    return int(time.time() * 1000)


class WorkoutManager:
    def __init__(
        self,
        plan: WorkoutPlan,
        *,
        notify: Notify,
        confirm: Confirm,
        controls: Optional[WorkoutControls] = None,
        store: Optional[SessionStore] = None,
        clock: Callable[[], int] = now_ms,
        rest_sec: int = DEFAULT_REST_SEC,
    ) -> None:
        self.plan = plan
        self.controls = controls or WorkoutControls()
        self.store = store or SessionStore()
        self.rest_timer = RestTimer(on_finish=self._on_rest_finish)
        self.finalizer = SessionFinalizer(self.store, self.rest_timer, self.controls)
        self.rest_sec = rest_sec
        self._notify = notify
        self._confirm = confirm
        self._clock = clock

    @property
    def exercises(self) -> tuple[ExerciseSession, ...]:
        return self.store.exercise_sessions

    @property
    def notes(self) -> str | None:
        return self.plan.notes

    @property
    def progress_percentage(self) -> int:
        return progress_percentage(self.store.exercise_sessions)

    @property
    def is_resting(self) -> bool:
        return self.rest_timer.is_active

    @property
    def remaining_rest_sec(self) -> int:
        return self.rest_timer.remaining_sec

    @property
    def can_rest(self) -> bool:
        return self.store.is_active

    def load(self) -> bool:
        if self.store.plan is not None and self.store.plan.plan_id == self.plan.plan_id:
            return False
        return self.store.initialize(self.plan)

    def edit_field(
        self,
        exercise_index: int,
        set_index: int,
        field: SetField,
        value: float | None,
    ) -> bool:
        return self.store.record_field_edit(exercise_index, set_index, field, value)

    def complete_set(self, exercise_index: int, set_index: int) -> bool:
        if not self.store.exercise_sessions:
            self._notify("Workout exercises data is not loaded yet", "negative")
            return False
        try:
            started = self.store.complete_set(
                exercise_index,
                set_index,
                now_ms=self._clock(),
                rest_sec=self.rest_timer.configured_sec,
            )
        except WorkoutSessionError as exc:
            self._notify(str(exc), "negative")
            return False
        if started:
            self.controls.start_workout(self.plan.plan_id)
        exercise = self.store.exercise_sessions[exercise_index]
        self._notify(f"{exercise.exercise_name} Set {set_index + 1} completed", "positive")
        return True

    def add_set(self, exercise_index: int) -> None:
        self.store.append_set(exercise_index)
        name = self.store.exercise_sessions[exercise_index].exercise_name
        self._notify(f"Set added to {name}", "positive")

    def remove_set(self, exercise_index: int, confirmed: bool | None = None) -> bool:
        exercise = self.store.exercise_at(exercise_index)
        name = exercise.exercise_name
        if len(exercise.sets) <= 1:
            self._notify(
                f"Cannot remove. At least one set is required for {name}.", "negative"
            )
            return False
        if not self._confirmed(
            f"Are you sure you want to delete the last set from {name}?", confirmed
        ):
            return False
        try:
            self.store.remove_last_set(exercise_index)
        except WorkoutSessionError as exc:
            self._notify(str(exc), "negative")
            return False
        self._notify(f"Set removed from {name}", "positive")
        return True

    def start_rest(self, seconds: int | None = None) -> bool:
        if not self.can_rest:
            self._notify("Complete a set before starting a rest period", "negative")
            return False
        if seconds is not None and seconds < 0:
            self._notify("Rest period cannot be negative", "negative")
            return False
        if seconds is not None:
            self.rest_sec = seconds
        self.rest_timer.start(self.rest_sec)
        return True

    def skip_rest(self) -> None:
        self.rest_timer.skip()

    def tick(self) -> None:
        """Advance one second of wall time."""
        if self.store.is_active:
            self.store.elapsed_duration_sec += 1
        self.rest_timer.tick()

    def cancel(self, confirmed: bool | None = None) -> bool:
        if not self._confirmed(CONFIRM_CANCEL, confirmed):
            return False
        self.finalizer.cancel()
        self._notify("Workout cancelled", "info")
        return True

    async def complete_workout(
        self,
        save: SaveWorkout,
        confirmed: bool | None = None,
    ) -> CompletionPayload | None:
        if not self.store.exercise_sessions:
            self._notify("No workout exercises available.", "negative")
            return None
        if self.store.has_incomplete_sets and not self._confirmed(
            CONFIRM_INCOMPLETE, confirmed
        ):
            return None
        try:
            payload = self.finalizer.build_completion_payload(self.plan)
            await self.finalizer.submit(payload, save)
        except WorkoutSessionError as exc:
            self._notify(str(exc), "negative")
            return None
        self._notify("Workout saved successfully!", "positive")
        return payload

    def _confirmed(self, question: str, confirmed: bool | None) -> bool:
        if confirmed is not None:
            return confirmed
        return bool(self._confirm(question))

    def _on_rest_finish(self, completed: bool) -> None:
        if completed:
            self._notify("Rest period over. Time to continue your workout!", "positive")
        else:
            self._notify("Rest period skipped. Continue your workout!", "positive")
