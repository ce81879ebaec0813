"""
Dashboard-Kennzahlen und Progression je Übung.

Reine Funktionen über der Eintragsliste; `now` wird explizit übergeben,
damit Tests deterministisch bleiben.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..models.records import entry_exercise_id, parse_timestamp

UNKNOWN_EXERCISE = "Unknown Lift"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Progression(str, Enum):
    UP = "up"
    DOWN = "down"
    NEUTRAL = "neutral"


def _entry_time(entry: Dict[str, Any]) -> datetime:
    return parse_timestamp(entry.get("date")) or _EPOCH


def total_sessions(entries: Sequence[Dict[str, Any]]) -> int:
    return len(entries)


def total_volume(entries: Iterable[Dict[str, Any]]) -> float:
    """Summe aus Gewicht × Wdh × Sätze über alle Einträge."""
    return sum(e["weight"] * e["reps"] * e["sets"] for e in entries)


def unique_exercises_trained(entries: Iterable[Dict[str, Any]]) -> int:
    return len({entry_exercise_id(e) for e in entries})


def personal_records(entries: Iterable[Dict[str, Any]]) -> Dict[str, float]:
    """exerciseId -> höchstes geloggtes Gewicht."""
    records: Dict[str, float] = {}
    for e in entries:
        ex_id = entry_exercise_id(e)
        if ex_id not in records or e["weight"] > records[ex_id]:
            records[ex_id] = e["weight"]
    return records


def personal_record_count(entries: Iterable[Dict[str, Any]]) -> int:
    return len(personal_records(entries))


def most_recent_entry(entries: Sequence[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not entries:
        return None
    # max() returns the first maximal element, so ties keep list order
    return max(entries, key=_entry_time)


def days_since_last_workout(entries: Sequence[Dict[str, Any]], now: Optional[datetime] = None) -> Optional[int]:
    last = most_recent_entry(entries)
    if last is None:
        return None
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return int((now - _entry_time(last)).total_seconds() // 86400)


def recent_entries(entries: Sequence[Dict[str, Any]], n: int = 5) -> List[Dict[str, Any]]:
    """Die n neuesten Einträge, absteigend nach Datum (stabil bei Gleichstand)."""
    return sorted(entries, key=_entry_time, reverse=True)[:n]


def exercise_progression(entries: Iterable[Dict[str, Any]], exercise_id: str) -> Progression:
    """
    Vergleicht die zwei jüngsten Einträge einer Übung.
    Gewicht vor Wiederholungen; Sätze und RPE zählen nicht.
    """
    history = sorted(
        (e for e in entries if entry_exercise_id(e) == exercise_id),
        key=_entry_time,
    )
    if len(history) < 2:
        return Progression.NEUTRAL

    previous, recent = history[-2], history[-1]
    if recent["weight"] > previous["weight"]:
        return Progression.UP
    if recent["weight"] < previous["weight"]:
        return Progression.DOWN
    if recent["reps"] > previous["reps"]:
        return Progression.UP
    if recent["reps"] < previous["reps"]:
        return Progression.DOWN
    return Progression.NEUTRAL


def weight_history(entries: Iterable[Dict[str, Any]], exercise_id: str) -> List[Tuple[datetime, float]]:
    """Gewichtsverlauf (aufsteigend) für das Liniendiagramm."""
    rows = sorted(
        (e for e in entries if entry_exercise_id(e) == exercise_id),
        key=_entry_time,
    )
    return [(_entry_time(e), float(e["weight"])) for e in rows]


def exercise_name(exercises: Iterable[Dict[str, Any]], exercise_id: Optional[str]) -> str:
    for ex in exercises:
        if ex.get("id") == exercise_id:
            return ex.get("name") or UNKNOWN_EXERCISE
    return UNKNOWN_EXERCISE


def consistency_message(days: Optional[int]) -> str:
    days = days or 0
    if days <= 2:
        return "Great consistency!"
    if days <= 7:
        return "Keep it up!"
    return "Time to get back to it!"


def days_ago_label(days: Optional[int]) -> str:
    days = days or 0
    if days == 0:
        return "Today"
    if days == 1:
        return "1 day ago"
    return f"{days} days ago"


def dashboard_metrics(
    entries: Sequence[Dict[str, Any]],
    now: Optional[datetime] = None,
    recent: int = 5,
) -> Dict[str, Any]:
    last = most_recent_entry(entries)
    days = days_since_last_workout(entries, now)
    return {
        "total_sessions": total_sessions(entries),
        "total_volume": total_volume(entries),
        "unique_exercises": unique_exercises_trained(entries),
        "personal_records": personal_record_count(entries),
        "last_workout": last,
        "last_workout_date": _entry_time(last) if last else None,
        "days_since_last_workout": days,
        "recent_entries": recent_entries(entries, recent),
    }
