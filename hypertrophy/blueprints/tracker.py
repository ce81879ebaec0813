from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List

from flask import Blueprint, current_app, flash, redirect, render_template, request, session, url_for

from ..models import store
from ..models.partition import PartitionId
from ..models.records import difficulty_label, entry_exercise_id, parse_timestamp
from ..services import metrics
from ..services.form_parser import parse_log_form
from .identity import current_partition, get_sync_bridge

bp = Blueprint("tracker", __name__)


class Tab(str, Enum):
    DASHBOARD = "dashboard"
    LOG = "log"
    EXERCISES = "exercises"
    HISTORY = "history"


TAB_LABELS = {
    Tab.DASHBOARD: "Dashboard",
    Tab.LOG: "Log Session",
    Tab.EXERCISES: "Exercises",
    Tab.HISTORY: "Progress",
}


@dataclass
class ViewState:
    """Alles, was ein Tab zum Rendern braucht (ein Objekt pro Request)."""

    tab: Tab
    partition: PartitionId
    exercises: List[Dict[str, Any]]
    workouts: List[Dict[str, Any]]
    now: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    selected_exercise_id: str = ""

    @classmethod
    def load(cls, tab: Tab, **kwargs) -> "ViewState":
        partition = current_partition()
        exercises, workouts = store.load_partition(partition)
        return cls(tab=tab, partition=partition, exercises=exercises, workouts=workouts, **kwargs)

    def dashboard(self) -> Dict[str, Any]:
        data = metrics.dashboard_metrics(self.workouts, self.now, current_app.config["RECENT_ENTRIES"])
        days = data["days_since_last_workout"]
        data["days_ago"] = metrics.days_ago_label(days)
        data["consistency"] = metrics.consistency_message(days)
        data["total_volume_display"] = f"{data['total_volume']:,.2f}".rstrip("0").rstrip(".")
        return data

    def exercise_id_of(self, entry: Dict[str, Any]) -> str:
        """exerciseId des Eintrags (ältere Einträge: liftId)."""
        return entry_exercise_id(entry) or ""

    def name_of(self, exercise_id: str) -> str:
        return metrics.exercise_name(self.exercises, exercise_id)

    def progression(self, exercise_id: str) -> str:
        return metrics.exercise_progression(self.workouts, exercise_id).value

    def difficulty_label(self, difficulty: int) -> str:
        return difficulty_label(difficulty)


def _last_sync_label() -> str:
    synced = parse_timestamp(session.get("last_sync"))
    return synced.strftime("%Y-%m-%d %H:%M UTC") if synced else ""


def _render(state: ViewState):
    return render_template(
        f"{state.tab.value}.html",
        state=state,
        tabs=TAB_LABELS,
        is_syncing=get_sync_bridge().is_syncing,
        last_sync=_last_sync_label(),
        weight_unit=current_app.config["WEIGHT_UNIT"],
    )


@bp.get("/<any(dashboard, log, exercises, history):tab>")
def show_tab(tab: str):
    selected = request.args.get("exercise_id", "")
    return _render(ViewState.load(Tab(tab), selected_exercise_id=selected))


@bp.post("/exercises")
def add_exercise():
    """Neue Übung anlegen; leerer Name -> nichts passiert."""
    exercise = store.add_exercise(current_partition(), request.form.get("name", ""))
    if exercise:
        flash(f"Added {exercise['name']}.", "success")
    return redirect(url_for("tracker.show_tab", tab=Tab.EXERCISES.value))


@bp.post("/exercises/<exercise_id>/delete")
def delete_exercise(exercise_id: str):
    """Löscht die Übung samt aller zugehörigen Einträge."""
    store.delete_exercise(current_partition(), exercise_id)
    return redirect(url_for("tracker.show_tab", tab=Tab.EXERCISES.value))


@bp.post("/log")
def log_session():
    data = parse_log_form(request.form)
    if data is None:
        return redirect(url_for("tracker.show_tab", tab=Tab.LOG.value))

    entry = store.log_workout(
        current_partition(),
        data["exercise_id"],
        data["weight"],
        data["reps"],
        data["sets"],
        data["difficulty"],
    )
    if entry:
        flash("Session logged.", "success")
    # Auswahl der Übung bleibt erhalten
    return redirect(url_for("tracker.show_tab", tab=Tab.LOG.value, exercise_id=data["exercise_id"]))


@bp.post("/history/<workout_id>/delete")
def delete_workout(workout_id: str):
    store.delete_workout(current_partition(), workout_id)
    return redirect(url_for("tracker.show_tab", tab=Tab.HISTORY.value))
