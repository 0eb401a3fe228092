"""Member lookups shared by the group and dashboard services."""

from __future__ import annotations

from typing import TYPE_CHECKING

from google.cloud.firestore import FieldFilter
from google.cloud.firestore_v1.field_path import FieldPath

from tasktrek.core.constants import MEMBER_QUERY_LIMIT, USERS_COLLECTION
from tasktrek.user.models import User

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def fetch_members(
    db: Client, member_ids: list[str], limit: int = MEMBER_QUERY_LIMIT
) -> list[User]:
    """Fetch the user documents of the first ``limit`` member ids.

    Firestore caps "in" filters at 30 values, so any ids past ``limit`` are
    dropped. Callers decide whether to warn about it.
    """
    ids = member_ids[:limit]
    if not ids:
        return []
    users = db.collection(USERS_COLLECTION)
    refs = [users.document(uid) for uid in ids]
    query = users.where(filter=FieldFilter(FieldPath.document_id(), "in", refs))
    return [User.from_snapshot(doc) for doc in query.stream()]
