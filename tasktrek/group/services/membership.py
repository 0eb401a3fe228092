"""Membership and role management for groups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import auth, firestore
from flask import current_app

from tasktrek.core.constants import ACTIVITIES_COLLECTION, GROUPS_COLLECTION
from tasktrek.errors import InternalError, NotFoundError, PermissionDeniedError

from ..models import Group

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def get_group(db: Client, group_id: str) -> Group:
    """Fetch a group or raise ``NotFoundError``."""
    group_doc = db.collection(GROUPS_COLLECTION).document(group_id).get()
    if not group_doc.exists:
        raise NotFoundError("Group not found.")
    return Group.from_snapshot(group_doc)


def _lookup_uid(auth_client: Any, email: str) -> str:
    """Resolve an email address to a Firebase Auth uid."""
    try:
        return auth_client.get_user_by_email(email).uid
    except auth.UserNotFoundError as e:
        raise NotFoundError(f"User {email} not found.") from e
    except Exception as e:
        current_app.logger.error(f"Error looking up user {email}: {e}")
        raise InternalError("Error looking up user.") from e


def invite_member(
    db: Client,
    auth_client: Any,
    group_id: str,
    inviter_id: str,
    email: str,
    owner_only: bool = False,
) -> dict[str, Any]:
    """Add the account registered under ``email`` to the group."""
    group = get_group(db, group_id)
    if owner_only:
        if not group.is_owner(inviter_id):
            raise PermissionDeniedError("Only the group owner can invite members.")
    elif not group.is_admin(inviter_id):
        raise PermissionDeniedError("Only group admins can invite members.")

    invitee_id = _lookup_uid(auth_client, email)
    if invitee_id in group.members:
        return {"success": True, "message": f"User {email} is already a member."}

    group_ref = db.collection(GROUPS_COLLECTION).document(group_id)
    group_ref.update({"members": firestore.ArrayUnion([invitee_id])})
    current_app.logger.info(
        f"User {invitee_id} added to group {group_id} by {inviter_id}"
    )

    db.collection(ACTIVITIES_COLLECTION).add(
        {
            "groupId": group_id,
            "userName": group.name,
            "type": "member-invited",
            "details": f"Invited {email} to the group.",
            "createdAt": firestore.SERVER_TIMESTAMP,
        }
    )
    return {"success": True, "message": f"User {email} successfully added!"}


def set_admin_status(
    db: Client, group_id: str, caller_id: str, target_id: str, make_admin: bool
) -> dict[str, Any]:
    """Promote or demote a member. The owner can never be demoted."""
    group = get_group(db, group_id)
    if not group.is_admin(caller_id):
        raise PermissionDeniedError("Only group admins can change roles.")
    if group.is_owner(target_id):
        raise PermissionDeniedError(
            "The group owner's admin status cannot be revoked."
        )

    group_ref = db.collection(GROUPS_COLLECTION).document(group_id)
    if make_admin:
        group_ref.update({"admins": firestore.ArrayUnion([target_id])})
        message = "User promoted to admin."
    else:
        group_ref.update({"admins": firestore.ArrayRemove([target_id])})
        message = "User demoted to member."
    current_app.logger.info(
        f"User {caller_id} changed admin status of {target_id} in {group_id}: "
        f"{message}"
    )
    return {"success": True, "message": message}
