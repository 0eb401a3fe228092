"""Service layer for group operations."""

from .deletion import delete_group
from .members import fetch_members
from .membership import get_group, invite_member, set_admin_status
from .stats import get_group_stats

__all__ = [
    "delete_group",
    "fetch_members",
    "get_group",
    "get_group_stats",
    "invite_member",
    "set_admin_status",
]
