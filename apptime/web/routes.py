"""
apptime/web/routes.py

Read-only JSON API over the query layer.
"""
from flask import Flask, jsonify, request
from typing import Any
from ..config import settings
from ..models import AppUsage, is_date_key, is_month_key
from ..services import QueryService


def register_routes(app: Flask, queries: QueryService) -> None:
    """Register usage API routes with Flask app."""

    @app.route("/api/months")
    def api_months() -> Any: # pyright: ignore[reportUnusedFunction]
        return jsonify({
            "months": queries.months(),
            "latest": queries.latest_month(),
        })

    @app.route("/api/months/<month>")
    def api_month(month: str) -> Any: # pyright: ignore[reportUnusedFunction]
        """Daily totals for the month's bar chart."""
        if not is_month_key(month):
            return jsonify({"error": f"Invalid month: {month}"}), 400
        try:
            return jsonify(queries.month_summary(month))
        except Exception as e:
            import traceback
            traceback.print_exc()
            return jsonify({"error": str(e)}), 500

    @app.route("/api/days/<date>")
    def api_day(date: str) -> Any: # pyright: ignore[reportUnusedFunction]
        """Full per-app breakdown for one day."""
        if not is_date_key(date):
            return jsonify({"error": f"Invalid date: {date}"}), 400
        try:
            detail = queries.day_detail(date)
            return jsonify({
                "date": date,
                "total_seconds": sum(secs for _, secs in detail),
                "apps": [AppUsage(app, secs).to_dict() for app, secs in detail],
            })
        except Exception as e:
            import traceback
            traceback.print_exc()
            return jsonify({"error": str(e)}), 500

    @app.route("/api/days/<date>/top")
    def api_day_top(date: str) -> Any: # pyright: ignore[reportUnusedFunction]
        """Top apps for one day (pie chart)."""
        if not is_date_key(date):
            return jsonify({"error": f"Invalid date: {date}"}), 400
        try:
            limit = int(request.args.get("limit", str(settings.top_apps_limit)))
        except ValueError:
            return jsonify({"error": "limit must be an integer"}), 400
        if limit < 0:
            return jsonify({"error": "limit must not be negative"}), 400
        try:
            apps = [AppUsage(app, secs).to_dict() for app, secs in queries.top_apps(date, limit)]
            return jsonify({"date": date, "apps": apps})
        except Exception as e:
            import traceback
            traceback.print_exc()
            return jsonify({"error": str(e)}), 500
