"""Data models for groups."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tasktrek.user.models import coerce_str


def _id_list(value: Any) -> list[str]:
    """Return the string ids in ``value``, or an empty list."""
    if not isinstance(value, (list, tuple)):
        return []
    return [v for v in value if isinstance(v, str) and v]


@dataclass
class Group:
    """A group document in Firestore."""

    id: str
    name: str = ""
    owner_id: str | None = None
    admins: list[str] = field(default_factory=list)
    members: list[str] = field(default_factory=list)

    @classmethod
    def from_snapshot(cls, snapshot: Any) -> Group:
        """Build a group from a Firestore document snapshot."""
        data = snapshot.to_dict() or {}
        return cls(
            id=snapshot.id,
            name=coerce_str(data.get("name")) or "",
            owner_id=coerce_str(data.get("ownerId")),
            admins=_id_list(data.get("admins")),
            members=_id_list(data.get("members")),
        )

    def is_admin(self, user_id: str) -> bool:
        """Return True if the user may manage the group."""
        return user_id in self.admins

    def is_owner(self, user_id: str) -> bool:
        """Return True if the user owns the group."""
        return self.owner_id is not None and self.owner_id == user_id
