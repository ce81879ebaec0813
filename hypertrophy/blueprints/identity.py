"""
Identität und Cloud-Sync.

Die Anmeldung selbst übernimmt der externe Identity-Provider; er reicht die
User-ID per Header durch (oder das Anmeldeformular postet sie). Hier wird nur
die aktive Partition umgeschaltet und der Abgleich angestoßen.
"""

from flask import Blueprint, current_app, flash, redirect, request, session, url_for

from ..models.partition import PartitionId
from ..services.sync import SyncBridge, SyncOutcome, reconcile_on_sign_in, sync_now

bp = Blueprint("identity", __name__, url_prefix="/auth")

_OUTCOME_MESSAGES = {
    SyncOutcome.REPLACED: "Loaded your data from the cloud.",
    SyncOutcome.PUSHED: "Your local data was saved to the cloud.",
}


def current_partition() -> PartitionId:
    """Aktive Partition: angemeldeter User oder anonym."""
    return PartitionId.for_user(session.get("user_id"))


def get_sync_bridge() -> SyncBridge:
    return current_app.extensions["sync_bridge"]


@bp.post("/sign-in")
def sign_in():
    header = current_app.config["IDENTITY_HEADER"]
    user_id = (request.headers.get(header) or request.form.get("user_id") or "").strip()
    if not user_id:
        return redirect(url_for("tracker.show_tab", tab="dashboard"))

    # Partition wird komplett gewechselt, kein Mischen mit der anonymen
    session["user_id"] = user_id
    session.pop("last_sync", None)
    partition = current_partition()

    if current_app.config["SYNC_ON_SIGN_IN"]:
        bridge = get_sync_bridge()
        outcome = reconcile_on_sign_in(bridge, partition)
        message = _OUTCOME_MESSAGES.get(outcome)
        if message:
            flash(message, "info")
        if outcome is not SyncOutcome.SKIPPED:
            _remember_sync(bridge)

    return redirect(url_for("tracker.show_tab", tab="dashboard"))


@bp.post("/sign-out")
def sign_out():
    session.pop("user_id", None)
    session.pop("last_sync", None)
    return redirect(url_for("tracker.show_tab", tab="dashboard"))


@bp.post("/sync")
def sync():
    """Manueller Sync-Knopf."""
    partition = current_partition()
    bridge = get_sync_bridge()
    if partition.is_anonymous or bridge.is_syncing:
        return redirect(request.referrer or url_for("tracker.show_tab", tab="dashboard"))

    if sync_now(bridge, partition):
        _remember_sync(bridge)
        flash("Synced.", "success")
    return redirect(request.referrer or url_for("tracker.show_tab", tab="dashboard"))


def _remember_sync(bridge: SyncBridge) -> None:
    # Bridge ist app-weit geteilt, der Zeitpunkt gehört in die Session des Users
    if bridge.last_sync_timestamp:
        session["last_sync"] = bridge.last_sync_timestamp
