"""Terminal CLI entrypoint for liftsession."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path

from liftsession.core.manager import DEFAULT_REST_SEC, NoticeKind, WorkoutManager
from liftsession.core.ticker import SessionTicker
from liftsession.session.finalizer import CompletionPayload
from liftsession.session.store import SetField
from liftsession.workout.history import load_recent_workouts, save_to_history
from liftsession.workout.parser import WorkoutParseError, load_workout_plan

_FIELD_COMMANDS: dict[str, SetField] = {"w": "weight", "r": "reps", "d": "duration"}

HELP_TEXT = """Commands:
  show                     list exercises and sets
  w|r|d <ex> <set> <val>   set weight / reps / duration (seconds)
  done <ex> <set>          mark a set completed
  add <ex>                 append a set
  rm <ex>                  remove the last set
  rest [sec]               start a rest period
  skip                     skip the current rest
  finish                   save the workout
  cancel                   discard the workout
  quit                     leave without saving
Exercise and set numbers start at 1."""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="liftsession workout tracker")
    parser.add_argument("--plan", type=Path, default=None, help="Workout plan (.json or .csv)")
    parser.add_argument(
        "--rest",
        type=int,
        default=DEFAULT_REST_SEC,
        help="Default rest period in seconds",
    )
    parser.add_argument(
        "--history",
        action="store_true",
        help="Print recently saved workouts",
    )
    parser.add_argument(
        "--history-file",
        type=Path,
        default=None,
        help="JSON-lines file used to store saved workouts",
    )
    parser.add_argument(
        "--ui-web",
        action="store_true",
        help="Launch web UI (NiceGUI) for the workout plan",
    )
    parser.add_argument("--web-host", default="127.0.0.1", help="Host bind for --ui-web")
    parser.add_argument("--web-port", type=int, default=8090, help="Port for --ui-web")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity",
    )
    return parser


def print_notice(message: str, kind: NoticeKind) -> None:
    prefix = {"positive": "OK", "negative": "!!", "info": "--"}[kind]
    print(f"[{prefix}] {message}")


def ask_confirm(question: str) -> bool:
    answer = input(f"{question} [y/N] ").strip().lower()
    return answer in ("y", "yes")


def format_session(manager: WorkoutManager) -> str:
    lines: list[str] = [f"{manager.plan.name}  ({manager.progress_percentage}% done)"]
    if manager.notes:
        lines.append(manager.notes)
    for ex_no, exercise in enumerate(manager.exercises, start=1):
        lines.append(f"{ex_no}. {exercise.exercise_name} [{exercise.tracking_type}]")
        for set_no, record in enumerate(exercise.sets, start=1):
            mark = "x" if record.completed else " "
            amount = (
                f"{record.duration_sec or '-'}s"
                if exercise.tracking_type == "duration"
                else f"{record.reps or '-'} reps"
            )
            weight = f"{record.weight:g}" if record.weight is not None else "-"
            lines.append(f"   [{mark}] set {set_no}: {amount} @ {weight}")
    if manager.is_resting:
        lines.append(f"Resting... {manager.remaining_rest_sec}s remaining")
    return "\n".join(lines)


def format_history_line(payload: CompletionPayload) -> str:
    minutes, seconds = divmod(payload.duration_sec, 60)
    return (
        f"{payload.date[:16]:<17} {payload.name:<24} "
        f"{len(payload.exercises):>2} ex {payload.set_count:>3} sets "
        f"{minutes:>3}:{seconds:02d}"
    )


async def run_session(manager: WorkoutManager, history_file: Path | None) -> int:
    manager.load()
    ticker = SessionTicker(manager.tick)
    ticker.start()
    print(format_session(manager))
    print("Type 'help' for commands.")
    try:
        while True:
            line = await asyncio.to_thread(input, "> ")
            parts = line.split()
            if not parts:
                continue
            command, args = parts[0].lower(), parts[1:]
            try:
                if command in ("quit", "exit"):
                    return 0
                if command == "help":
                    print(HELP_TEXT)
                elif command == "show":
                    print(format_session(manager))
                elif command in _FIELD_COMMANDS:
                    ex, set_no, value = int(args[0]), int(args[1]), float(args[2])
                    field = _FIELD_COMMANDS[command]
                    if not manager.edit_field(ex - 1, set_no - 1, field, value):
                        print_notice("Completed sets cannot be edited", "negative")
                elif command == "done":
                    manager.complete_set(int(args[0]) - 1, int(args[1]) - 1)
                elif command == "add":
                    manager.add_set(int(args[0]) - 1)
                elif command == "rm":
                    manager.remove_set(int(args[0]) - 1)
                elif command == "rest":
                    manager.start_rest(int(args[0]) if args else None)
                elif command == "skip":
                    manager.skip_rest()
                elif command == "cancel":
                    if manager.cancel():
                        return 0
                elif command == "finish":
                    payload = await manager.complete_workout(
                        lambda p: save_to_history(p, path=history_file)
                    )
                    if payload is not None:
                        return 0
                else:
                    print(f"Unknown command '{command}'. Type 'help' for commands.")
            except (IndexError, ValueError):
                print(f"Invalid arguments for '{command}'. Type 'help' for commands.")
    finally:
        await ticker.stop()


def run_history(history_file: Path | None) -> int:
    items = load_recent_workouts(limit=20, path=history_file)
    if not items:
        print("No saved workouts")
        return 0
    for payload in items:
        print(format_history_line(payload))
    return 0


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.history:
        return run_history(args.history_file)

    if args.plan is None:
        parser.print_help()
        return 1

    try:
        plan = load_workout_plan(args.plan)
    except (OSError, WorkoutParseError) as exc:
        print(f"Cannot load plan: {exc}")
        return 1

    if args.ui_web:
        from liftsession.ui.web_app import run_web_ui

        return run_web_ui(
            plan,
            host=args.web_host,
            port=args.web_port,
            rest_sec=max(0, args.rest),
            history_file=args.history_file,
        )

    manager = WorkoutManager(
        plan,
        notify=print_notice,
        confirm=ask_confirm,
        rest_sec=max(0, args.rest),
    )
    try:
        return asyncio.run(run_session(manager, args.history_file))
    except (KeyboardInterrupt, EOFError):
        return 0


if __name__ == "__main__":
    raise SystemExit(main())
