"""The dashboard blueprint."""

from flask import Blueprint

bp = Blueprint("dashboard", __name__, url_prefix="/api")

from . import routes  # noqa: E402

__all__ = ["routes"]
