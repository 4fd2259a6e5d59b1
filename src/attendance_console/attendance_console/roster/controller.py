from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import ValidationError
from ..web.http import json_body, json_view, make_login_required, required_date_arg


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)
    roster = container.roster_service

    @app.route("/api/roster", methods=["GET"], endpoint="view_roster")
    @json_view
    @login_required
    def view_roster(ctx):
        start = required_date_arg(request.args.get("start"), "Start date")
        end = required_date_arg(request.args.get("end"), "End date")
        employee_ids = request.args.getlist("employee_id") or None
        return jsonify({"success": True, **roster.view(employee_ids, start, end).to_dict()})

    @app.route("/api/roster", methods=["PUT"], endpoint="save_roster")
    @json_view
    @login_required
    def save_roster(ctx):
        body = json_body()
        start = required_date_arg(body.get("start"), "Start date")
        end = required_date_arg(body.get("end"), "End date")
        cells = body.get("cells") or []
        if not isinstance(cells, list):
            raise ValidationError("cells must be a list")

        grid = roster.build_grid(body.get("employee_ids") or None, start, end)
        for item in cells:
            if not isinstance(item, dict):
                raise ValidationError("Each cell must be an object")
            employee_id = str(item.get("employee_id") or "")
            day = required_date_arg(item.get("date"), "Cell date")
            if "shift_id" in item:
                grid.set_shift(employee_id, day, item.get("shift_id"))
            if "shift_type_id" in item:
                grid.set_shift_type(employee_id, day, item.get("shift_type_id"))

        saved = roster.save_grid(grid, created_by=ctx.user_id)
        return jsonify({"success": True, "saved": saved})
