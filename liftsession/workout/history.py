"""Local persistence for saved workouts."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from liftsession.session.finalizer import CompletionPayload

logger = logging.getLogger(__name__)


def _default_history_path() -> Path:
    return Path.home() / ".liftsession" / "workouts.jsonl"


def append_workout(payload: CompletionPayload, path: Path | None = None) -> None:
    target = path or _default_history_path()
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(payload.to_dict(), ensure_ascii=True) + "\n")


def save_to_history(payload: CompletionPayload, path: Path | None = None) -> bool:
    append_workout(payload, path=path)
    return True


def load_recent_workouts(
    limit: int = 20, path: Path | None = None
) -> list[CompletionPayload]:
    target = path or _default_history_path()
    if not target.exists():
        return []

    lines = target.read_text(encoding="utf-8").splitlines()
    out: list[CompletionPayload] = []
    for raw in reversed(lines):
        if not raw.strip():
            continue
        try:
            out.append(CompletionPayload.from_dict(json.loads(raw)))
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Skipping unreadable history line in %s: %s", target, exc)
            continue
        if len(out) >= limit:
            break
    return out
