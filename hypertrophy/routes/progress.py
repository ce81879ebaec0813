# hypertrophy/routes/progress.py
from __future__ import annotations

import io

from flask import Blueprint, Response, abort, current_app, request

# Matplotlib im Headless-Mode
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from hypertrophy.blueprints.identity import current_partition
from hypertrophy.models import store
from hypertrophy.services.metrics import weight_history

progress_bp = Blueprint("progress", __name__, url_prefix="/progress")


@progress_bp.get("/exercise/<exercise_id>/png")
def exercise_png(exercise_id: str):
    """
    PNG für eine Übung zeichnen.
    Liniendiagramm: Gewicht über die Zeit (aktive Partition).
    Optional: ?download=1 setzt Attachment-Header.
    """
    exercises, workouts = store.load_partition(current_partition())
    exercise = next((e for e in exercises if e.get("id") == exercise_id), None)
    if exercise is None:
        abort(404, "Exercise not found")

    exercise_name = exercise.get("name") or exercise_id
    history = weight_history(workouts, exercise_id)
    dates = [dt for dt, _ in history]
    weights = [w for _, w in history]
    unit = current_app.config["WEIGHT_UNIT"]

    fig, ax = plt.subplots(figsize=(7.5, 3.2), dpi=140)

    if weights:
        ax.plot(dates, weights, marker="o", linewidth=2)
    else:
        ax.text(
            0.5, 0.5,
            "No data yet",
            ha="center", va="center", transform=ax.transAxes
        )

    ax.set_title(f"Load over time – {exercise_name}")
    ax.set_ylabel(f"Load ({unit})")
    ax.set_xlabel("Date")
    ax.grid(True, linestyle=":", alpha=0.4)
    fig.autofmt_xdate()
    plt.tight_layout()

    buf = io.BytesIO()
    fig.savefig(buf, format="png")
    plt.close(fig)
    buf.seek(0)

    download = request.args.get("download", type=int) == 1
    headers = {}
    if download:
        base = exercise_name.replace('"', "'")
        headers["Content-Disposition"] = f'attachment; filename="progress_exercise_{base}.png"'
    return Response(buf.getvalue(), mimetype="image/png", headers=headers)
