"""
Record types stored per partition.

Records are plain JSON-ready dicts with the camelCase keys used on the wire:
  Exercise:     id, name, createdAt
  WorkoutEntry: id, exerciseId, weight, reps, sets, difficulty, date
"""

from __future__ import annotations

import time
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, TypedDict


class Exercise(TypedDict):
    id: str
    name: str
    createdAt: str


class WorkoutEntry(TypedDict):
    id: str
    exerciseId: str
    weight: float
    reps: int
    sets: int
    difficulty: int
    date: str


DIFFICULTY_LABELS = {1: "RPE 6", 2: "RPE 7", 3: "RPE 8", 4: "RPE 9", 5: "RPE 10"}
DEFAULT_DIFFICULTY = 3


def utcnow_iso(now: Optional[datetime] = None) -> str:
    """UTC timestamp ISO (milliseconds, 'Z'-Suffix)."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parses stored timestamps; naive values are treated as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value, tz=timezone.utc)
    else:
        try:
            dt = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def new_id(existing: Iterable[str] = ()) -> str:
    """Time-based token, bumped until it is unique among `existing`."""
    taken = set(existing)
    candidate = time.time_ns() // 1000
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


def new_exercise(name: str, existing_ids: Iterable[str] = (), now: Optional[datetime] = None) -> Exercise:
    return {"id": new_id(existing_ids), "name": name.strip(), "createdAt": utcnow_iso(now)}


def new_workout_entry(
    exercise_id: str,
    weight: float,
    reps: int,
    sets: int,
    difficulty: int = DEFAULT_DIFFICULTY,
    existing_ids: Iterable[str] = (),
    now: Optional[datetime] = None,
) -> WorkoutEntry:
    return {
        "id": new_id(existing_ids),
        "exerciseId": exercise_id,
        "weight": weight,
        "reps": reps,
        "sets": sets,
        "difficulty": difficulty,
        "date": utcnow_iso(now),
    }


def entry_exercise_id(entry: Dict[str, Any]) -> Optional[str]:
    """exerciseId, with fallback to the older 'liftId' key."""
    value = entry.get("exerciseId", entry.get("liftId"))
    return None if value is None else str(value)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_valid_exercise(obj: Any) -> bool:
    return isinstance(obj, dict) and obj.get("id") not in (None, "") and isinstance(obj.get("name"), str)


def is_valid_workout_entry(obj: Any) -> bool:
    """Dict mit id, Übungs-Referenz und numerischem weight/reps/sets."""
    return (
        isinstance(obj, dict)
        and obj.get("id") not in (None, "")
        and entry_exercise_id(obj) is not None
        and all(_is_number(obj.get(k)) for k in ("weight", "reps", "sets"))
    )


def difficulty_label(difficulty: Any) -> str:
    try:
        return DIFFICULTY_LABELS.get(int(difficulty), "")
    except (TypeError, ValueError):
        return ""
