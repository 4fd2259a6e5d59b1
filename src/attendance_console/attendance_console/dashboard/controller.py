from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..container import Container
from ..core.enums import LeaveType
from ..core.exceptions import ValidationError
from ..web.http import int_arg, json_view, make_login_required, required_date_arg


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)
    dashboard = container.dashboard_service

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @json_view
    @login_required
    def summary(ctx):
        today = today_local()
        return jsonify({"success": True, "date": today.strftime("%Y-%m-%d"), **dashboard.summary(today).to_dict()})

    @app.route("/api/calendar", methods=["GET"], endpoint="calendar")
    @json_view
    @login_required
    def calendar(ctx):
        today = today_local()
        year = int_arg(request.args.get("year"), "year", today.year)
        month = int_arg(request.args.get("month"), "month", today.month)
        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")

        leave_type = None
        raw_type = (request.args.get("leave_type") or "").strip()
        if raw_type and raw_type.lower() != "all":
            try:
                leave_type = LeaveType(raw_type)
            except ValueError:
                raise ValidationError(f"Leave type must be one of: {', '.join(t.value for t in LeaveType)}")

        weeks = dashboard.month_calendar(year, month, leave_type)
        return jsonify({"success": True, "year": year, "month": month, "weeks": weeks})

    @app.route("/api/calendar/day/<day>", methods=["GET"], endpoint="calendar_day")
    @json_view
    @login_required
    def calendar_day(ctx, day: str):
        parsed = required_date_arg(day, "Date")
        plans = dashboard.leaves_for_date(parsed)
        return jsonify({"success": True, "date": parsed.strftime("%Y-%m-%d"), "plans": [p.to_dict() for p in plans]})
