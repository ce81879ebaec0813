"""
Seed-Befehl für die Hypertrophy App.

Fügt typische Studio-Übungen in die anonyme Partition ein.

Ausführung:
    flask --app hypertrophy seed-exercises
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from hypertrophy.models import store
from hypertrophy.models.partition import PartitionId

# Typische Studio-Übungen
EXERCISES: list[str] = [
    "Barbell Back Squat",
    "Leg Press",
    "Romanian Deadlift",
    "Conventional Deadlift",
    "Barbell Bench Press",
    "Incline Dumbbell Press",
    "Barbell Row",
    "Lat Pulldown",
    "Seated Cable Row",
    "Overhead Press",
    "Lateral Raise",
    "Barbell Curl",
    "Cable Triceps Pushdown",
]


def seed_exercises(partition: PartitionId) -> int:
    """Fügt fehlende Übungen hinzu (idempotent) und gibt deren Anzahl zurück."""
    exercises, _ = store.load_partition(partition)
    known = {e.get("name", "").casefold() for e in exercises}

    added = 0
    for name in EXERCISES:
        if name.casefold() in known:
            continue
        store.add_exercise(partition, name)
        added += 1
    return added


@click.command("seed-exercises")
@with_appcontext
def seed_command() -> None:
    added = seed_exercises(PartitionId.anonymous())
    exercises, _ = store.load_partition(PartitionId.anonymous())
    click.echo(f"{added} Übungen hinzugefügt, Partition enthält jetzt {len(exercises)}.")
