"""
Utilities for parsing the log-session form.
"""

from __future__ import annotations
import math
from typing import Any, Dict, Optional

from ..models.records import DEFAULT_DIFFICULTY


def _to_int(raw: Any) -> Optional[int]:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


def _to_float(raw: Any) -> Optional[float]:
    try:
        return float(str(raw).replace(",", ".").strip())
    except (TypeError, ValueError):
        return None


def parse_log_form(form: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """
    Reads the fields posted by log.html.

    Expected:
      { "exercise_id": str, "weight": float >= 0, "reps": int >= 1,
        "sets": int >= 1, "difficulty": int 1..5 (default 3) }

    Returns None when a required field is missing or out of range, so the
    submission becomes a no-op.
    """
    exercise_id = (form.get("exercise_id") or "").strip()
    if not exercise_id:
        return None

    weight = _to_float(form.get("weight"))
    reps = _to_int(form.get("reps"))
    sets = _to_int(form.get("sets"))
    if weight is None or reps is None or sets is None:
        return None
    if not math.isfinite(weight) or weight < 0 or reps < 1 or sets < 1:
        return None

    raw_difficulty = form.get("difficulty")
    if raw_difficulty in (None, ""):
        difficulty = DEFAULT_DIFFICULTY
    else:
        difficulty = _to_int(raw_difficulty)
        if difficulty is None or not 1 <= difficulty <= 5:
            return None

    return {
        "exercise_id": exercise_id,
        "weight": weight,
        "reps": reps,
        "sets": sets,
        "difficulty": difficulty,
    }
