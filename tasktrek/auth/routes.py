from flask import current_app, g

from tasktrek.extensions import firebase
from tasktrek.user.services import sync_user_profile as sync_profile

from . import bp
from .decorators import callable_endpoint


@bp.route("/syncUserProfile", methods=["POST"])
@callable_endpoint
def sync_user_profile(data):
    """
    Called by the client after every successful Firebase sign-in.
    Makes sure the user's document exists and records the login time.
    """
    result = sync_profile(firebase.db, g.uid, g.token, data)
    if result["created"]:
        current_app.logger.info(f"Created user document for {g.uid}")
    return result
