from flask import Blueprint, current_app, jsonify, request
from sqlalchemy.exc import SQLAlchemyError

from ..models.profile import Profile, db
from ..models.records import utcnow_iso

bp = Blueprint("cloud", __name__, url_prefix="/api")


@bp.post("/sync-data")
def sync_data():
    """Speichert beide Listen im Profil des Users (ersetzt den alten Stand)."""
    payload = request.get_json(silent=True) or {}
    user_id = payload.get("userId")
    if not user_id:
        return jsonify({"error": "User ID required"}), 400

    try:
        profile = db.session.get(Profile, user_id)
        if profile is None:
            profile = Profile(user_id=user_id)
            db.session.add(profile)
        profile.private_metadata = {
            "exercises": payload.get("exercises") or [],
            "workouts": payload.get("workouts") or [],
            "lastSyncTimestamp": utcnow_iso(),
        }
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Sync error for %s", user_id)
        return jsonify({"error": "Sync failed"}), 500

    return jsonify({"success": True})


@bp.get("/load-data")
def load_data():
    """Liefert den gespeicherten Stand; unbekannte User bekommen leere Listen."""
    user_id = request.args.get("userId")
    if not user_id:
        return jsonify({"error": "User ID required"}), 400

    try:
        profile = db.session.get(Profile, user_id)
    except SQLAlchemyError:
        current_app.logger.exception("Load error for %s", user_id)
        return jsonify({"error": "Load failed"}), 500

    metadata = (profile.private_metadata if profile else None) or {}
    return jsonify({
        "exercises": metadata.get("exercises") or [],
        "workouts": metadata.get("workouts") or [],
        "lastSyncTimestamp": metadata.get("lastSyncTimestamp"),
    })
