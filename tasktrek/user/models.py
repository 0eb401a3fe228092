"""Data models for users."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tasktrek.core.dates import to_datetime


def coerce_int(value: Any) -> int:
    """Return ``value`` as an int, treating anything non-numeric as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, float):
        # NaN and infinities have no int value
        if not math.isfinite(value):
            return 0
        return int(value)
    return 0


def coerce_str(value: Any) -> str | None:
    """Return a non-empty string or ``None``."""
    if isinstance(value, str) and value:
        return value
    return None


@dataclass
class User:
    """A user document in Firestore."""

    id: str
    name: str = "Unnamed"
    points: int = 0
    active_group_id: str | None = None
    last_login: datetime | None = None
    created_at: datetime | None = None

    @classmethod
    def from_dict(cls, user_id: str, data: dict[str, Any] | None) -> User:
        """Build a user from raw document data, defaulting bad fields."""
        data = data or {}
        return cls(
            id=user_id,
            name=coerce_str(data.get("name")) or "Unnamed",
            points=coerce_int(data.get("points")),
            active_group_id=coerce_str(data.get("activeGroupId")),
            last_login=to_datetime(data.get("lastLogin")),
            created_at=to_datetime(data.get("createdAt")),
        )

    @classmethod
    def from_snapshot(cls, snapshot: Any) -> User:
        """Build a user from a Firestore document snapshot."""
        return cls.from_dict(snapshot.id, snapshot.to_dict())
