"""NiceGUI web UI for a workout session."""

from __future__ import annotations

from pathlib import Path

from nicegui import ui

from liftsession.core.manager import NoticeKind, WorkoutManager
from liftsession.session.store import SetField
from liftsession.workout.history import load_recent_workouts, save_to_history
from liftsession.workout.model import WorkoutPlan


def _fmt_duration(total_seconds: int) -> str:
    minutes, seconds = divmod(max(0, total_seconds), 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours:d}:{minutes:02d}:{seconds:02d}"
    return f"{minutes:02d}:{seconds:02d}"


def _notify(message: str, kind: NoticeKind) -> None:
    ui.notify(message, color=kind if kind != "info" else None)


def _unexpected_confirm(question: str) -> bool:
    # Every destructive action in this UI asks through an async dialog first.
    raise RuntimeError(f"Unanswered confirmation: {question}")


def run_web_ui(
    plan: WorkoutPlan,
    *,
    host: str = "127.0.0.1",
    port: int = 8090,
    rest_sec: int = 60,
    history_file: Path | None = None,
) -> int:
    manager = WorkoutManager(
        plan,
        notify=_notify,
        confirm=_unexpected_confirm,
        rest_sec=rest_sec,
    )
    manager.load()

    async def ask(question: str) -> bool:
        with ui.dialog() as dialog, ui.card():
            ui.label(question)
            with ui.row().classes("w-full justify-end gap-2"):
                ui.button("No", on_click=lambda: dialog.submit(False)).props("flat")
                ui.button("Yes", on_click=lambda: dialog.submit(True))
        answer = await dialog
        dialog.clear()
        return bool(answer)

    with ui.column().classes("w-full gap-1"):
        ui.label(plan.name).classes("text-xl font-semibold tracking-wide")
        if plan.notes:
            ui.label(plan.notes).classes("text-sm text-slate-500")
        status_label = ui.label("").classes("text-sm font-medium")

    @ui.refreshable
    def exercise_cards() -> None:
        with ui.grid().classes("w-full grid-cols-1 lg:grid-cols-2 gap-3"):
            for ex_idx, exercise in enumerate(manager.exercises):
                amount_field: SetField = (
                    "duration" if exercise.tracking_type == "duration" else "reps"
                )
                amount_label = "Seconds" if amount_field == "duration" else "Reps"
                with ui.card().classes("w-full"):
                    ui.label(f"{ex_idx + 1}. {exercise.exercise_name}").classes("text-lg")
                    for set_idx, record in enumerate(exercise.sets):
                        amount = (
                            record.duration_sec if amount_field == "duration" else record.reps
                        )
                        with ui.row().classes("w-full items-center gap-2"):
                            ui.label(f"Set {set_idx + 1}").classes("w-12")
                            weight_input = ui.number("Weight", value=record.weight, min=0)
                            amount_input = ui.number(amount_label, value=amount, min=0)
                            done_btn = ui.button(
                                "Done" if record.completed else "Complete",
                                on_click=lambda _, e=ex_idx, s=set_idx: on_complete(e, s),
                            )
                            if record.completed:
                                weight_input.disable()
                                amount_input.disable()
                                done_btn.disable()
                            else:
                                weight_input.on_value_change(
                                    lambda ev, e=ex_idx, s=set_idx: manager.edit_field(
                                        e, s, "weight", ev.value
                                    )
                                )
                                amount_input.on_value_change(
                                    lambda ev, e=ex_idx, s=set_idx, f=amount_field: (
                                        manager.edit_field(e, s, f, ev.value)
                                    )
                                )
                    with ui.row().classes("gap-2"):
                        ui.button(
                            "Add Set", on_click=lambda _, e=ex_idx: on_add_set(e)
                        ).props("size=sm")
                        ui.button(
                            "Remove Set", on_click=lambda _, e=ex_idx: on_remove_set(e)
                        ).props("size=sm")

    exercise_cards()

    with ui.row().classes("w-full items-end gap-2 mt-4"):
        rest_input = ui.number("Rest (sec)", value=rest_sec, min=0)
        rest_btn = ui.button("Start Rest")
        skip_btn = ui.button("Skip Rest")
        rest_label = ui.label("").classes("text-base")

    progress_bar = ui.linear_progress(value=0.0, show_value=False).classes("w-full")
    with ui.row().classes("w-full items-center gap-2"):
        progress_label = ui.label("0%")
        duration_label = ui.label("00:00")
        finish_btn = ui.button("Complete Workout")
        cancel_btn = ui.button("Cancel Workout").props("color=negative")

    ui.label("Recent workouts").classes("text-base font-medium mt-4")
    history_column = ui.column().classes("w-full gap-0")

    def refresh_history() -> None:
        history_column.clear()
        with history_column:
            items = load_recent_workouts(limit=5, path=history_file)
            if not items:
                ui.label("No saved workouts").classes("text-sm text-slate-500")
            for item in items:
                ui.label(
                    f"{item.date[:16]}  {item.name}  {item.set_count} sets  "
                    f"{_fmt_duration(item.duration_sec)}"
                ).classes("text-sm")

    def refresh_ui() -> None:
        pct = manager.progress_percentage
        progress_bar.set_value(pct / 100)
        progress_label.set_text(f"{pct}%")
        duration_label.set_text(_fmt_duration(manager.store.elapsed_duration_sec))
        if manager.is_resting:
            rest_label.set_text(f"Resting... {manager.remaining_rest_sec}s remaining")
        else:
            rest_label.set_text("")
        if manager.can_rest:
            rest_btn.enable()
            rest_input.enable()
        else:
            rest_btn.disable()
            rest_input.disable()
        if manager.is_resting:
            skip_btn.enable()
        else:
            skip_btn.disable()
        if manager.controls.is_saving:
            finish_btn.disable()
        else:
            finish_btn.enable()

    def on_tick() -> None:
        manager.tick()
        refresh_ui()

    def on_complete(exercise_index: int, set_index: int) -> None:
        if manager.complete_set(exercise_index, set_index):
            exercise_cards.refresh()
        refresh_ui()

    def on_add_set(exercise_index: int) -> None:
        manager.add_set(exercise_index)
        exercise_cards.refresh()
        refresh_ui()

    async def on_remove_set(exercise_index: int) -> None:
        exercise = manager.exercises[exercise_index]
        confirmed: bool | None = None
        if len(exercise.sets) > 1:
            confirmed = await ask(
                f"Are you sure you want to delete the last set from {exercise.exercise_name}?"
            )
        if manager.remove_set(exercise_index, confirmed=confirmed):
            exercise_cards.refresh()
        refresh_ui()

    def on_start_rest() -> None:
        manager.start_rest(int(rest_input.value or 0))
        refresh_ui()

    def on_skip_rest() -> None:
        manager.skip_rest()
        refresh_ui()

    def start_fresh(message: str) -> None:
        manager.load()
        status_label.set_text(message)
        exercise_cards.refresh()
        refresh_ui()

    async def on_cancel() -> None:
        if not await ask("Are you sure you want to cancel the workout? This cannot be undone."):
            return
        if manager.cancel(confirmed=True):
            start_fresh("Workout cancelled")

    async def on_finish() -> None:
        confirmed: bool | None = None
        if manager.store.has_incomplete_sets:
            confirmed = await ask(
                "There are incomplete sets. These will not be saved. Do you want to proceed?"
            )
            if not confirmed:
                return
        refresh_ui()
        payload = await manager.complete_workout(
            lambda p: save_to_history(p, path=history_file),
            confirmed=confirmed,
        )
        if payload is not None:
            refresh_history()
            start_fresh(f"Saved {payload.name}: {payload.set_count} sets")
        refresh_ui()

    rest_btn.on_click(on_start_rest)
    skip_btn.on_click(on_skip_rest)
    finish_btn.on_click(on_finish)
    cancel_btn.on_click(on_cancel)

    refresh_history()
    refresh_ui()
    ui.timer(1.0, on_tick)
    ui.run(host=host, port=port, reload=False, title=f"liftsession - {plan.name}")
    return 0
