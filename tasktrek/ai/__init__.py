"""The AI suggestions blueprint."""

from flask import Blueprint

bp = Blueprint("ai", __name__, url_prefix="/api")

from . import routes  # noqa: E402

__all__ = ["routes"]
