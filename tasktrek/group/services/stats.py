"""Statistics service for groups."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from flask import current_app

from tasktrek.core.constants import MEMBER_QUERY_LIMIT
from tasktrek.core.dates import local_now, start_of_day, start_of_week
from tasktrek.user.models import User

from .members import fetch_members
from .membership import get_group

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def count_member_activity(
    members: list[User], now: datetime
) -> dict[str, int]:
    """Count members active since midnight and members who joined this week."""
    today_start = start_of_day(now)
    week_start = start_of_week(now)
    active_today = sum(
        1 for m in members if m.last_login and m.last_login >= today_start
    )
    new_this_week = sum(
        1 for m in members if m.created_at and m.created_at >= week_start
    )
    return {"activeToday": active_today, "newThisWeek": new_this_week}


def get_group_stats(
    db: Client,
    group_id: str,
    now: datetime | None = None,
    member_limit: int = MEMBER_QUERY_LIMIT,
) -> dict[str, int]:
    """Calculate member activity statistics for a group."""
    group = get_group(db, group_id)
    if not group.members:
        current_app.logger.info(f"Group {group_id} has no members.")
        return {"activeToday": 0, "newThisWeek": 0}

    if len(group.members) > member_limit:
        current_app.logger.warning(
            f"Group {group_id} has {len(group.members)} members, "
            f"querying stats only for first {member_limit}."
        )

    members = fetch_members(db, group.members, limit=member_limit)
    stats = count_member_activity(members, now or local_now())
    current_app.logger.info(
        f"Stats for group {group_id}: ActiveToday={stats['activeToday']}, "
        f"NewThisWeek={stats['newThisWeek']}"
    )
    return stats
