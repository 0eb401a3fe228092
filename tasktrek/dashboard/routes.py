"""Routes for the dashboard blueprint."""

from flask import current_app, g

from tasktrek.auth.decorators import callable_endpoint
from tasktrek.extensions import firebase

from . import bp
from .services import get_dashboard_data as build_dashboard, parse_period


@bp.route("/getDashboardData", methods=["POST"])
@callable_endpoint
def get_dashboard_data(data):
    """Return the stat cards and chart data for the caller's dashboard."""
    period = parse_period(data.get("period", "month"))
    current_app.logger.info(
        f"Fetching dashboard data for user: {g.uid}, period: {period}"
    )
    return build_dashboard(
        firebase.db,
        g.uid,
        period=period,
        member_limit=current_app.config["MEMBER_QUERY_LIMIT"],
        max_others=current_app.config["POINTS_CHART_MAX_OTHERS"],
    )
