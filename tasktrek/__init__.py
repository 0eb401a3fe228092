"""Initialize the Flask app and its providers."""

import os

from flask import Flask
from werkzeug.middleware.proxy_fix import ProxyFix

from .core import constants
from .extensions import firebase, suggestion_model


def _env_flag(name, default="false"):
    """Read a boolean flag from the environment."""
    return (os.environ.get(name) or default).lower() in ["true", "1", "t"]


def _env_int(name, default):
    """Read an integer setting from the environment."""
    return int(os.environ.get(name) or default)


def create_app(test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__, instance_relative_config=True)

    # Load configuration
    app.config.from_mapping(
        SECRET_KEY=os.environ.get("SECRET_KEY") or "dev",
        FIREBASE_PROJECT_ID=os.environ.get("FIREBASE_PROJECT_ID"),
        FIREBASE_CREDENTIALS_JSON=os.environ.get("FIREBASE_CREDENTIALS_JSON"),
        FIREBASE_CLIENT_EMAIL=os.environ.get("FIREBASE_CLIENT_EMAIL"),
        FIREBASE_PRIVATE_KEY=os.environ.get("FIREBASE_PRIVATE_KEY"),
        GOOGLE_API_KEY=os.environ.get("GOOGLE_API_KEY"),
        AI_MODEL_NAME=os.environ.get("AI_MODEL_NAME") or constants.AI_MODEL_NAME,
        AI_TASK_HISTORY_LIMIT=_env_int(
            "AI_TASK_HISTORY_LIMIT", constants.AI_TASK_HISTORY_LIMIT
        ),
        MEMBER_QUERY_LIMIT=_env_int("MEMBER_QUERY_LIMIT", constants.MEMBER_QUERY_LIMIT),
        POINTS_CHART_MAX_OTHERS=_env_int(
            "POINTS_CHART_MAX_OTHERS", constants.POINTS_CHART_MAX_OTHERS
        ),
        BATCH_WRITE_LIMIT=_env_int("BATCH_WRITE_LIMIT", constants.FIRESTORE_BATCH_LIMIT),
        INVITE_REQUIRES_OWNER=_env_flag("INVITE_REQUIRES_OWNER"),
    )

    if test_config:
        app.config.update(test_config)

    # Initialize providers
    firebase.init_app(app)
    suggestion_model.init_app(app)

    # Register blueprints
    from . import auth as auth_bp

    app.register_blueprint(auth_bp.bp)

    from . import dashboard as dashboard_bp

    app.register_blueprint(dashboard_bp.bp)

    from . import group as group_bp

    app.register_blueprint(group_bp.bp)

    from . import ai as ai_bp

    app.register_blueprint(ai_bp.bp)

    from . import error_handlers

    app.register_blueprint(error_handlers.error_handlers_bp)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    return app
