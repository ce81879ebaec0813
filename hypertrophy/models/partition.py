from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

ANONYMOUS = "anonymous"


class Namespace(str, Enum):
    """Fixed key prefixes, one per entity type."""

    EXERCISES = "gym-lifts"
    WORKOUTS = "gym-workouts"


@dataclass(frozen=True)
class PartitionId:
    """Identifies one user's pair of exercise/workout lists."""

    user_id: Optional[str] = None

    @classmethod
    def anonymous(cls) -> "PartitionId":
        return cls(None)

    @classmethod
    def for_user(cls, user_id: Optional[str]) -> "PartitionId":
        user_id = (user_id or "").strip()
        return cls(user_id or None)

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None

    @property
    def key(self) -> str:
        return ANONYMOUS if self.user_id is None else self.user_id

    def storage_key(self, namespace: Namespace) -> str:
        return f"{namespace.value}-{self.key}"
