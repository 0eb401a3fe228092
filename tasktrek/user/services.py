"""Service layer for user lookups."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore

from tasktrek.core.constants import USERS_COLLECTION

from .models import User

if TYPE_CHECKING:
    from google.cloud.firestore_v1.client import Client


def get_user(db: Client, user_id: str) -> User | None:
    """Fetch a user by their ID."""
    user_doc = db.collection(USERS_COLLECTION).document(user_id).get()
    if not user_doc.exists:
        return None
    return User.from_snapshot(user_doc)


def get_user_rank(db: Client, user_id: str) -> int | None:
    """Return the user's 1-based position in the global points ranking.

    Users with equal points keep the order Firestore returns them in.
    """
    users_query = db.collection(USERS_COLLECTION).order_by(
        "points", direction=firestore.Query.DESCENDING
    )
    for index, doc in enumerate(users_query.stream()):
        if doc.id == user_id:
            return index + 1
    return None


def sync_user_profile(
    db: Client, user_id: str, claims: dict[str, Any], data: dict[str, Any]
) -> dict[str, bool]:
    """Create the user's document on first sign-in, else refresh ``lastLogin``."""
    user_ref = db.collection(USERS_COLLECTION).document(user_id)
    if user_ref.get().exists:
        user_ref.set({"lastLogin": firestore.SERVER_TIMESTAMP}, merge=True)
        return {"created": False}

    name = data.get("name") or claims.get("name") or "Unnamed User"
    user_ref.set(
        {
            "uid": user_id,
            "email": claims.get("email") or "",
            "name": name,
            "photoURL": claims.get("picture") or "",
            "points": 0,
            "createdAt": firestore.SERVER_TIMESTAMP,
            "lastLogin": firestore.SERVER_TIMESTAMP,
        }
    )
    return {"created": True}
