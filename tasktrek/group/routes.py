"""Routes for the group blueprint."""

from flask import current_app, g

from tasktrek.auth.decorators import callable_endpoint
from tasktrek.errors import ValidationError
from tasktrek.extensions import firebase

from . import bp
from .services import delete_group as delete_group_cascade
from .services import get_group_stats as compute_group_stats
from .services import invite_member, set_admin_status


def _require(data, *fields, message):
    """Return the requested fields, raising ValidationError if any is blank."""
    values = [data.get(field) for field in fields]
    if not all(isinstance(v, str) and v.strip() for v in values):
        raise ValidationError(message)
    return [v.strip() for v in values]


@bp.route("/inviteMemberToGroup", methods=["POST"])
@callable_endpoint
def invite_member_to_group(data):
    """Add a registered user to a group by email."""
    email, group_id = _require(
        data, "email", "groupId", message="Email and groupId required."
    )
    current_app.logger.info(f"User {g.uid} inviting {email} to group {group_id}")
    return invite_member(
        firebase.db,
        firebase.auth,
        group_id,
        g.uid,
        email,
        owner_only=current_app.config["INVITE_REQUIRES_OWNER"],
    )


@bp.route("/getGroupStats", methods=["POST"])
@callable_endpoint
def get_group_stats(data):
    """Return how many members were active today and joined this week."""
    (group_id,) = _require(data, "groupId", message="GroupId is required.")
    current_app.logger.info(f"Fetching stats for group {group_id}, called by user {g.uid}")
    return compute_group_stats(
        firebase.db, group_id, member_limit=current_app.config["MEMBER_QUERY_LIMIT"]
    )


@bp.route("/deleteGroup", methods=["POST"])
@callable_endpoint
def delete_group(data):
    """Delete a group and everything that belongs to it. Owner only."""
    (group_id,) = _require(data, "groupId", message="groupId is required.")
    current_app.logger.info(f"User {g.uid} attempting to delete group {group_id}")
    return delete_group_cascade(
        firebase.db,
        group_id,
        g.uid,
        batch_limit=current_app.config["BATCH_WRITE_LIMIT"],
    )


@bp.route("/toggleAdminStatus", methods=["POST"])
@callable_endpoint
def toggle_admin_status(data):
    """Promote a member to admin or demote an admin to member."""
    group_id, target_user_id = _require(
        data,
        "groupId",
        "targetUserId",
        message="groupId and targetUserId are required.",
    )
    return set_admin_status(
        firebase.db, group_id, g.uid, target_user_id, bool(data.get("makeAdmin"))
    )
