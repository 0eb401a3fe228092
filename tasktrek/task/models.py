"""Data models for tasks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from tasktrek.core.constants import (
    STATUS_COMPLETED,
    STATUS_IN_PROGRESS,
    STATUS_PENDING,
)
from tasktrek.core.dates import to_datetime
from tasktrek.user.models import coerce_int, coerce_str


@dataclass
class Task:
    """A task document in Firestore."""

    id: str
    title: str | None = None
    assignee: str | None = None
    assignee_name: str | None = None
    group_id: str | None = None
    status: str = STATUS_PENDING
    due_date: str | None = None
    points: int = 0
    created_at: datetime | None = None
    completed_at: datetime | None = None

    @classmethod
    def from_dict(cls, task_id: str, data: dict[str, Any] | None) -> Task:
        """Build a task from raw document data, defaulting bad fields."""
        data = data or {}
        return cls(
            id=task_id,
            title=coerce_str(data.get("title")),
            assignee=coerce_str(data.get("assignee")),
            assignee_name=coerce_str(data.get("assigneeName")),
            group_id=coerce_str(data.get("groupId")),
            # Unknown statuses are kept so totals still count them.
            status=coerce_str(data.get("status")) or STATUS_PENDING,
            due_date=coerce_str(data.get("dueDate")),
            points=coerce_int(data.get("points")),
            created_at=to_datetime(data.get("createdAt")),
            completed_at=to_datetime(data.get("completedAt")),
        )

    @classmethod
    def from_snapshot(cls, snapshot: Any) -> Task:
        """Build a task from a Firestore document snapshot."""
        return cls.from_dict(snapshot.id, snapshot.to_dict())

    @property
    def is_completed(self) -> bool:
        return self.status == STATUS_COMPLETED

    @property
    def is_in_progress(self) -> bool:
        return self.status == STATUS_IN_PROGRESS
