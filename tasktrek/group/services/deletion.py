"""Cascading deletion of a group and everything that belongs to it."""

from __future__ import annotations

from typing import TYPE_CHECKING

from flask import current_app
from google.cloud.firestore import FieldFilter

from tasktrek.core.batch import BoundedBatchWriter
from tasktrek.core.constants import (
    FIRESTORE_BATCH_LIMIT,
    GROUP_OWNED_COLLECTIONS,
    GROUPS_COLLECTION,
    USERS_COLLECTION,
)
from tasktrek.errors import PermissionDeniedError

from .membership import get_group

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def delete_group(
    db: Client, group_id: str, user_id: str, batch_limit: int = FIRESTORE_BATCH_LIMIT
) -> dict[str, bool]:
    """Delete a group, its tasks, shop items and activities.

    Users whose active group is the deleted one have it cleared. The group
    document itself goes out in the last batch.
    """
    group = get_group(db, group_id)
    if not group.is_owner(user_id):
        current_app.logger.warning(
            f"Permission denied: User {user_id} is not owner of group {group_id}."
        )
        raise PermissionDeniedError("Only the group owner can delete this group.")

    writer = BoundedBatchWriter(db, limit=batch_limit)

    for collection_name in GROUP_OWNED_COLLECTIONS:
        docs = list(
            db.collection(collection_name)
            .where(filter=FieldFilter("groupId", "==", group_id))
            .stream()
        )
        if docs:
            current_app.logger.info(
                f"Found {len(docs)} documents in {collection_name} to delete."
            )
        for doc in docs:
            writer.delete(doc.reference)

    users = list(
        db.collection(USERS_COLLECTION)
        .where(filter=FieldFilter("activeGroupId", "==", group_id))
        .stream()
    )
    if users:
        current_app.logger.info(
            f"Found {len(users)} users to update activeGroupId for."
        )
    for user_doc in users:
        writer.update(user_doc.reference, {"activeGroupId": None})

    writer.delete(db.collection(GROUPS_COLLECTION).document(group_id))
    writer.close()

    current_app.logger.info(
        f"Successfully deleted group {group_id} and all associated data."
    )
    return {"success": True}
