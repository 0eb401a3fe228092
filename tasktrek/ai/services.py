"""Prompting and response parsing for AI task suggestions."""

from __future__ import annotations

import json
import re
from datetime import datetime
from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from flask import current_app
from google.cloud.firestore import FieldFilter

from tasktrek.core.constants import AI_TASK_HISTORY_LIMIT, TASKS_COLLECTION
from tasktrek.task.models import Task

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client

NO_HISTORY = "No previous tasks found."

_FENCE_OPEN = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_CLOSE = re.compile(r"\s*```$")

PROMPT_TEMPLATE = """You are a helpful productivity assistant analyzing a user's task history.
Here are some of their recent tasks and approximate creation dates:
{task_list}

Based on this history and the current time ({current_time}), suggest exactly 3 short, actionable tasks this user might typically do.

For each suggestion, provide:
1.  A concise 'title'.
2.  A brief 'description' (one sentence).
3.  A 'difficulty' level ('bronze', 'silver', or 'gold').
4.  An estimated 'points' value (integer between 10 and 100 based on title and difficulty).

Format the output strictly as a JSON array of objects, like this example:
[
  {{
    "title": "Example Task 1",
    "description": "This is a sample description.",
    "difficulty": "silver",
    "points": 50
  }},
  {{
    "title": "Example Task 2",
    "description": "Another sample description.",
    "difficulty": "bronze",
    "points": 25
  }}
]
Do not include any text before or after the JSON array."""


class SuggestionFormatError(ValueError):
    """Raised when the model output is not a list of well-formed suggestions."""


def fetch_recent_tasks(
    db: Client, assignee_name: str, limit: int = AI_TASK_HISTORY_LIMIT
) -> list[Task]:
    """Fetch the assignee's most recently created tasks."""
    query = (
        db.collection(TASKS_COLLECTION)
        .where(filter=FieldFilter("assigneeName", "==", assignee_name))
        .order_by("createdAt", direction=firestore.Query.DESCENDING)
        .limit(limit)
    )
    return [Task.from_snapshot(doc) for doc in query.stream()]


def format_task_history(tasks: list[Task]) -> str:
    """Render tasks as prompt bullet lines."""
    if not tasks:
        return NO_HISTORY
    lines = []
    for task in tasks:
        created = task.created_at
        when = f"{created.month}/{created.day}/{created.year}" if created else "unknown date"
        lines.append(f"- {task.title or 'Untitled Task'} (created around {when})")
    return "\n".join(lines)


def load_task_history(
    db: Client, assignee_name: str, limit: int = AI_TASK_HISTORY_LIMIT
) -> str:
    """Return the prompt history block, falling back when the query fails."""
    try:
        return format_task_history(fetch_recent_tasks(db, assignee_name, limit))
    except Exception as e:
        current_app.logger.error(f"Error fetching tasks from Firestore: {e}")
        return NO_HISTORY


def format_current_time(now: datetime) -> str:
    """Format a time like ``Sat 3:05 PM``."""
    hour = now.hour % 12 or 12
    return f"{now:%a} {hour}:{now:%M} {now:%p}"


def build_prompt(task_list: str, now: datetime) -> str:
    """Render the suggestion prompt."""
    return PROMPT_TEMPLATE.format(
        task_list=task_list, current_time=format_current_time(now)
    )


def strip_code_fence(text: str) -> str:
    """Remove a Markdown code fence wrapped around the model output."""
    return _FENCE_CLOSE.sub("", _FENCE_OPEN.sub("", text.strip()))


def _is_suggestion(item: Any) -> bool:
    if not isinstance(item, dict):
        return False
    points = item.get("points")
    return (
        bool(item.get("title"))
        and bool(item.get("difficulty"))
        and isinstance(points, (int, float))
        and not isinstance(points, bool)
    )


def parse_suggestions(text: str) -> list[dict[str, Any]]:
    """Parse the model output as a JSON array of suggestions."""
    try:
        suggestions = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise SuggestionFormatError(f"AI response is not JSON: {e}") from e
    if not isinstance(suggestions, list) or not all(
        _is_suggestion(s) for s in suggestions
    ):
        raise SuggestionFormatError("AI response format incorrect.")
    return suggestions


def fallback_suggestions(text: str) -> list[dict[str, str]]:
    """Treat every non-blank line of the output as a bare title."""
    titles = []
    for line in text.split("\n"):
        title = line.strip()
        if title.startswith("- "):
            title = title[2:]
        if title:
            titles.append(title)
    return [
        {"title": title, "description": "", "difficulty": "", "points": ""}
        for title in titles
    ]
