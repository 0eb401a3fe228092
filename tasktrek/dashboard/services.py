"""Service for dashboard data aggregation."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Any

from flask import current_app
from google.cloud.firestore import FieldFilter

from tasktrek.core.constants import (
    GROUPS_COLLECTION,
    MEMBER_QUERY_LIMIT,
    PERIOD_MONTH,
    PERIOD_WEEK,
    POINTS_CHART_MAX_OTHERS,
    TASKS_COLLECTION,
)
from tasktrek.core.dates import (
    days_before,
    local_now,
    short_date_label,
    start_of_day,
    start_of_week,
)
from tasktrek.core.types import ChartData
from tasktrek.errors import AppError, InternalError, NotFoundError
from tasktrek.group.models import Group
from tasktrek.group.services.members import fetch_members
from tasktrek.task.models import Task
from tasktrek.user.models import User
from tasktrek.user.services import get_user, get_user_rank

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

POINTS_CHART_COLORS = ["#8b5cf6", "#a78bfa", "#c084fc", "#f59e0b", "#10b981", "#6b7280"]
MONTH_LABELS = ["3 Weeks Ago", "2 Weeks Ago", "Last Week", "This Week"]
OTHER_MEMBERS_LABEL = "Other Members"


def parse_period(value: Any) -> str:
    """Return ``week`` for the weekly view and ``month`` for anything else."""
    return PERIOD_WEEK if value == PERIOD_WEEK else PERIOD_MONTH


def completion_rate(completed: int, total: int) -> int:
    """Return the percentage of completed tasks, rounded half up."""
    if total <= 0:
        return 0
    return math.floor(100 * completed / total + 0.5)


def format_trend(this_week: int, last_week: int) -> str:
    """Describe the week-over-week change in created tasks."""
    if last_week > 0:
        percent = math.floor((this_week - last_week) / last_week * 100 + 0.5)
        sign = "+" if percent >= 0 else ""
        return f"{sign}{percent}% this week"
    if this_week > 0:
        return "+100% this week"
    return "0% this week"


def compute_task_stats(
    tasks: list[Task], today: str, week_start: datetime
) -> dict[str, int]:
    """Fold the caller's tasks into the dashboard stat cards."""
    stats = {
        "tasksTotal": 0,
        "tasksInProgress": 0,
        "tasksCompleted": 0,
        "tasksDueToday": 0,
        "pointsThisWeek": 0,
        "tasksCompletedThisWeek": 0,
    }
    for task in tasks:
        stats["tasksTotal"] += 1
        if task.is_in_progress:
            stats["tasksInProgress"] += 1
        if task.due_date == today and not task.is_completed:
            stats["tasksDueToday"] += 1
        if task.is_completed:
            stats["tasksCompleted"] += 1
            if task.completed_at and task.completed_at >= week_start:
                stats["tasksCompletedThisWeek"] += 1
                stats["pointsThisWeek"] += task.points
    stats["completionRate"] = completion_rate(
        stats["tasksCompleted"], stats["tasksTotal"]
    )
    return stats


def chart_window(now: datetime, period: str) -> tuple[datetime, int, int, list[str]]:
    """Return ``(start, buckets, days_per_bucket, labels)`` for a chart period."""
    today = start_of_day(now)
    if period == PERIOD_WEEK:
        start = days_before(today, 6)
        first = start.date()
        labels = [short_date_label(first + timedelta(days=i)) for i in range(7)]
        return start, 7, 1, labels
    start = days_before(today, 27)
    return start, 4, 7, list(MONTH_LABELS)


def _bucket(moment: datetime, start: datetime, days_per_bucket: int) -> int:
    return (moment.date() - start.date()).days // days_per_bucket


def build_task_chart(
    tasks: list[Task], now: datetime, period: str
) -> tuple[ChartData, str]:
    """Bucket the group's tasks into created/completed series plus a trend."""
    start, buckets, days_per_bucket, labels = chart_window(now, period)
    week_start = start_of_week(now)
    last_week_start = days_before(week_start, 7)

    created = [0] * buckets
    completed = [0] * buckets
    created_this_week = created_last_week = 0

    for task in tasks:
        if task.created_at is None:
            continue
        if task.created_at >= week_start:
            created_this_week += 1
        elif task.created_at >= last_week_start:
            created_last_week += 1

        if task.created_at < start:
            continue
        index = _bucket(task.created_at, start, days_per_bucket)
        if 0 <= index < buckets:
            created[index] += 1
        if task.is_completed and task.completed_at and task.completed_at >= start:
            index = _bucket(task.completed_at, start, days_per_bucket)
            if 0 <= index < buckets:
                completed[index] += 1

    chart: ChartData = {
        "labels": labels,
        "datasets": [
            {
                "label": "Tasks Completed",
                "data": completed,
                "borderColor": "#8b5cf6",
                "backgroundColor": "rgba(139, 92, 246, 0.1)",
                "borderWidth": 2,
                "fill": True,
                "tension": 0.4,
            },
            {
                "label": "Tasks Created",
                "data": created,
                "borderColor": "#f59e0b",
                "backgroundColor": "rgba(245, 158, 11, 0.1)",
                "borderWidth": 2,
                "fill": False,
                "tension": 0.4,
            },
        ],
    }
    return chart, format_trend(created_this_week, created_last_week)


def build_points_chart(
    members: list[User], user_id: str, max_others: int = POINTS_CHART_MAX_OTHERS
) -> ChartData:
    """Build the donut chart of member points.

    The caller always gets the first slice. The ``max_others`` highest-scoring
    other members get a slice each and everybody else is summed into
    "Other Members" when that sum is positive.
    """
    ranked = sorted(members, key=lambda m: m.points, reverse=True)
    me = next((m for m in ranked if m.id == user_id), None)
    others = [m for m in ranked if m.id != user_id]

    labels = ["You"]
    data = [me.points if me else 0]
    for member in others[:max_others]:
        labels.append(member.name)
        data.append(member.points)
    other_points = sum(m.points for m in others[max_others:])
    if other_points > 0:
        labels.append(OTHER_MEMBERS_LABEL)
        data.append(other_points)

    return {
        "labels": labels,
        "datasets": [
            {
                "data": data,
                "backgroundColor": POINTS_CHART_COLORS,
                "borderColor": "var(--bg)",
                "borderWidth": 2,
            }
        ],
    }


def get_group_points_chart(
    db: Client,
    group_id: str,
    user_id: str,
    member_limit: int = MEMBER_QUERY_LIMIT,
    max_others: int = POINTS_CHART_MAX_OTHERS,
) -> ChartData:
    """Fetch the group's members and build the points donut chart."""
    group_doc = db.collection(GROUPS_COLLECTION).document(group_id).get()
    member_ids = Group.from_snapshot(group_doc).members if group_doc.exists else []
    if not member_ids:
        return {"labels": ["No Members"], "datasets": [{"data": [1]}]}
    members = fetch_members(db, member_ids, limit=member_limit)
    return build_points_chart(members, user_id, max_others=max_others)


def _fetch_user_tasks(db: Client, user_id: str, group_id: str) -> list[Task]:
    query = (
        db.collection(TASKS_COLLECTION)
        .where(filter=FieldFilter("assignee", "==", user_id))
        .where(filter=FieldFilter("groupId", "==", group_id))
    )
    return [Task.from_snapshot(doc) for doc in query.stream()]


def _fetch_group_tasks(db: Client, group_id: str, since: datetime) -> list[Task]:
    query = (
        db.collection(TASKS_COLLECTION)
        .where(filter=FieldFilter("groupId", "==", group_id))
        .where(filter=FieldFilter("createdAt", ">=", since))
    )
    return [Task.from_snapshot(doc) for doc in query.stream()]


def _no_group_payload(user: User, rank: int | None) -> dict[str, Any]:
    return {
        "userPoints": user.points,
        "userRank": rank,
        "tasksTotal": 0,
        "tasksInProgress": 0,
        "tasksCompleted": 0,
        "tasksDueToday": 0,
        "completionRate": 0,
        "pointsThisWeek": 0,
        "tasksCompletedThisWeek": 0,
        "taskChartData": {"labels": ["No Group Selected"], "datasets": []},
        "pointsChartData": {
            "labels": ["No Group Selected"],
            "datasets": [{"data": [1]}],
        },
        "totalTasksTrend": "N/A",
    }


def get_dashboard_data(
    db: Client,
    user_id: str,
    period: str = PERIOD_MONTH,
    now: datetime | None = None,
    member_limit: int = MEMBER_QUERY_LIMIT,
    max_others: int = POINTS_CHART_MAX_OTHERS,
) -> dict[str, Any]:
    """Aggregate all data required for the user dashboard."""
    period = parse_period(period)
    now = now or local_now()

    try:
        user = get_user(db, user_id)
    except Exception as e:
        current_app.logger.error(f"Error getting user doc for {user_id}: {e}")
        raise InternalError("Could not fetch user data.") from e
    if user is None:
        raise NotFoundError("User document not found.")

    if not user.active_group_id:
        current_app.logger.warning(
            f"User {user_id} has no active group. Returning partial data."
        )
        rank = None
        try:
            rank = get_user_rank(db, user_id)
        except Exception as e:
            current_app.logger.error(f"Error getting rank for {user_id}: {e}")
        return _no_group_payload(user, rank)

    group_id = user.active_group_id
    week_start = start_of_week(now)
    last_week_start = days_before(week_start, 7)
    chart_start = chart_window(now, period)[0]

    try:
        rank = get_user_rank(db, user_id)

        user_tasks = _fetch_user_tasks(db, user_id, group_id)
        stats = compute_task_stats(user_tasks, now.date().isoformat(), week_start)

        group_tasks = _fetch_group_tasks(
            db, group_id, min(chart_start, last_week_start)
        )
        task_chart, trend = build_task_chart(group_tasks, now, period)

        points_chart = get_group_points_chart(
            db, group_id, user_id, member_limit=member_limit, max_others=max_others
        )
    except AppError:
        raise
    except Exception as e:
        current_app.logger.error(
            f"Error fetching full dashboard stats for {user_id}: {e}"
        )
        raise InternalError("Failed to fetch dashboard data.") from e

    return {
        "userPoints": user.points,
        "userRank": rank,
        "tasksTotal": stats["tasksTotal"],
        "tasksInProgress": stats["tasksInProgress"],
        "tasksCompleted": stats["tasksCompleted"],
        "tasksDueToday": stats["tasksDueToday"],
        "completionRate": stats["completionRate"],
        "pointsThisWeek": stats["pointsThisWeek"],
        "tasksCompletedThisWeek": stats["tasksCompletedThisWeek"],
        "taskChartData": task_chart,
        "pointsChartData": points_chart,
        "totalTasksTrend": trend,
    }
