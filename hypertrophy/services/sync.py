"""
Cloud sync for the two entity lists.

Talks to the per-user profile store (`/sync-data`, `/load-data`). Every
transport or server failure degrades to a no-op: the local partition stays
authoritative and the failure is only logged.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Callable, List, Optional, Tuple

import requests

from ..models import store
from ..models.partition import PartitionId
from ..models.records import is_valid_exercise, is_valid_workout_entry, utcnow_iso

log = logging.getLogger(__name__)


class SyncOutcome(str, Enum):
    REPLACED = "replaced"  # remote data replaced the local partition
    PUSHED = "pushed"      # remote was empty, local partition pushed
    SKIPPED = "skipped"    # anonymous user or remote unreachable


class SyncBridge:
    """Push/pull client for the remote profile store."""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.is_syncing = False
        self.last_sync_timestamp: Optional[str] = None

    def push(self, user_id: str, exercises: List[Any], workouts: List[Any]) -> bool:
        if not user_id:
            return False
        self.is_syncing = True
        try:
            resp = self.session.post(
                f"{self.base_url}/sync-data",
                json={"exercises": exercises, "workouts": workouts, "userId": user_id},
                timeout=self.timeout,
            )
            if not resp.ok:
                log.warning("Sync push for %s failed with HTTP %s", user_id, resp.status_code)
                return False
            self.last_sync_timestamp = utcnow_iso()
            return True
        except requests.RequestException as exc:
            log.warning("Error syncing data for %s: %s", user_id, exc)
            return False
        finally:
            self.is_syncing = False

    def fetch(self, user_id: str) -> Optional[Tuple[List[Any], List[Any]]]:
        """Like pull(), but None when the remote could not be read."""
        if not user_id:
            return None
        self.is_syncing = True
        try:
            resp = self.session.get(
                f"{self.base_url}/load-data",
                params={"userId": user_id},
                timeout=self.timeout,
            )
            if not resp.ok:
                log.warning("Sync pull for %s failed with HTTP %s", user_id, resp.status_code)
                return None
            data = resp.json()
        except (requests.RequestException, ValueError) as exc:
            log.warning("Error loading data for %s: %s", user_id, exc)
            return None
        finally:
            self.is_syncing = False

        if not isinstance(data, dict):
            log.warning("Unexpected load-data payload for %s", user_id)
            return None
        self.last_sync_timestamp = data.get("lastSyncTimestamp")
        return (
            _as_list(data.get("exercises"), is_valid_exercise),
            _as_list(data.get("workouts"), is_valid_workout_entry),
        )

    def pull(self, user_id: str) -> Tuple[List[Any], List[Any]]:
        result = self.fetch(user_id)
        return result if result is not None else ([], [])


def _as_list(value: Any, is_valid: Callable[[Any], bool]) -> List[Any]:
    if not isinstance(value, list):
        return []
    valid = [item for item in value if is_valid(item)]
    if len(valid) != len(value):
        log.warning("Dropped %d malformed remote record(s)", len(value) - len(valid))
    return valid


def reconcile_on_sign_in(bridge: SyncBridge, partition: PartitionId) -> SyncOutcome:
    """
    Non-empty remote data replaces the local partition wholesale; local-only
    records are lost. An empty remote gets the local partition pushed instead.
    """
    if partition.is_anonymous:
        return SyncOutcome.SKIPPED

    remote = bridge.fetch(partition.user_id)
    if remote is None:
        return SyncOutcome.SKIPPED

    exercises, workouts = remote
    if exercises or workouts:
        store.save_partition(partition, exercises, workouts)
        return SyncOutcome.REPLACED

    local_exercises, local_workouts = store.load_partition(partition)
    bridge.push(partition.user_id, local_exercises, local_workouts)
    return SyncOutcome.PUSHED


def sync_now(bridge: SyncBridge, partition: PartitionId) -> bool:
    """Manual push of the active partition."""
    if partition.is_anonymous:
        return False
    exercises, workouts = store.load_partition(partition)
    return bridge.push(partition.user_id, exercises, workouts)
