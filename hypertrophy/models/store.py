"""
Record Store: die zwei Listen (Übungen, Einträge) je Partition im lokalen
Key-Value-Speicher.

Jeder Schreibvorgang ersetzt beide Listen in einer Transaktion. Lesefehler
(Speicher nicht verfügbar, kaputtes JSON) liefern leere Listen.
"""

from __future__ import annotations

import json
import sqlite3
from datetime import datetime
from typing import Any, Callable, List, Optional, Tuple

from flask import current_app

from ..db import get_db
from .partition import Namespace, PartitionId
from .records import (
    DEFAULT_DIFFICULTY,
    Exercise,
    WorkoutEntry,
    entry_exercise_id,
    is_valid_exercise,
    is_valid_workout_entry,
    new_exercise,
    new_workout_entry,
)

Partition = Tuple[List[Exercise], List[WorkoutEntry]]


def _read_list(db: sqlite3.Connection, key: str, is_valid: Callable[[Any], bool]) -> List[Any]:
    try:
        row = db.execute("SELECT value FROM local_storage WHERE key = ?", (key,)).fetchone()
    except sqlite3.Error as exc:
        current_app.logger.warning("Local storage unavailable for %s: %s", key, exc)
        return []
    if row is None:
        return []
    try:
        value = json.loads(row["value"])
    except ValueError:
        current_app.logger.warning("Corrupt value under %s, using default", key)
        return []
    if not isinstance(value, list):
        current_app.logger.warning("Unexpected value type under %s, using default", key)
        return []
    valid = [item for item in value if is_valid(item)]
    if len(valid) != len(value):
        current_app.logger.warning("Dropped %d malformed record(s) under %s", len(value) - len(valid), key)
    return valid


def load_partition(partition: PartitionId) -> Partition:
    """Letzter geschriebener Stand der Partition oder ([], [])."""
    db = get_db()
    exercises = _read_list(db, partition.storage_key(Namespace.EXERCISES), is_valid_exercise)
    workouts = _read_list(db, partition.storage_key(Namespace.WORKOUTS), is_valid_workout_entry)
    return exercises, workouts


def save_partition(partition: PartitionId, exercises: List[Exercise], workouts: List[WorkoutEntry]) -> None:
    """Ersetzt beide Listen der Partition atomar."""
    db = get_db()
    rows = [
        (partition.storage_key(Namespace.EXERCISES), json.dumps(list(exercises), separators=(",", ":"))),
        (partition.storage_key(Namespace.WORKOUTS), json.dumps(list(workouts), separators=(",", ":"))),
    ]
    try:
        with db:
            db.executemany(
                """
                INSERT INTO local_storage (key, value) VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                rows,
            )
    except sqlite3.Error:
        current_app.logger.exception("Error saving partition %s to local storage", partition.key)


def add_exercise(partition: PartitionId, name: str) -> Optional[Exercise]:
    name = (name or "").strip()
    if not name:
        return None
    exercises, workouts = load_partition(partition)
    exercise = new_exercise(name, existing_ids=(e.get("id") for e in exercises))
    save_partition(partition, [*exercises, exercise], workouts)
    return exercise


def delete_exercise(partition: PartitionId, exercise_id: str) -> None:
    """Löscht die Übung und alle Einträge, die auf sie verweisen."""
    exercises, workouts = load_partition(partition)
    save_partition(
        partition,
        [e for e in exercises if e.get("id") != exercise_id],
        [w for w in workouts if entry_exercise_id(w) != exercise_id],
    )


def log_workout(
    partition: PartitionId,
    exercise_id: str,
    weight: float,
    reps: int,
    sets: int,
    difficulty: int = DEFAULT_DIFFICULTY,
    date: Optional[datetime] = None,
) -> Optional[WorkoutEntry]:
    """Neuer Eintrag vorne in der Liste; unbekannte Übung -> None.

    ``date`` fehlt -> jetzt (UTC).
    """
    exercises, workouts = load_partition(partition)
    if not any(e.get("id") == exercise_id for e in exercises):
        return None
    entry = new_workout_entry(
        exercise_id, weight, reps, sets, difficulty,
        existing_ids=(w.get("id") for w in workouts),
        now=date,
    )
    save_partition(partition, exercises, [entry, *workouts])
    return entry


def delete_workout(partition: PartitionId, workout_id: str) -> None:
    exercises, workouts = load_partition(partition)
    save_partition(partition, exercises, [w for w in workouts if w.get("id") != workout_id])
