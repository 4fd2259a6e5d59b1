from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..web.http import int_arg, json_body, json_view, make_login_required


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)
    shifts = container.shift_service

    @app.route("/api/shifts", methods=["GET"], endpoint="list_shifts")
    @json_view
    @login_required
    def list_shifts(ctx):
        return jsonify({"success": True, "shifts": [s.to_dict() for s in shifts.list_shifts()]})

    @app.route("/api/shifts", methods=["POST"], endpoint="add_shift")
    @json_view
    @login_required
    def add_shift(ctx):
        body = json_body()
        shift = shifts.add_shift(
            name=body.get("name", ""),
            description=body.get("description", ""),
            start_time=body.get("start_time", ""),
            end_time=body.get("end_time", ""),
            color=body.get("color"),
            grace_period=int_arg(body.get("grace_period"), "Grace period", 0),
            created_by=ctx.user_id,
        )
        return jsonify({"success": True, "shift": shift.to_dict()}), 201

    @app.route("/api/shifts/<shift_id>", methods=["DELETE"], endpoint="delete_shift")
    @json_view
    @login_required
    def delete_shift(ctx, shift_id: str):
        shifts.delete_shift(shift_id)
        return jsonify({"success": True})

    @app.route("/api/shift-types", methods=["GET"], endpoint="list_shift_types")
    @json_view
    @login_required
    def list_shift_types(ctx):
        return jsonify({"success": True, "shift_types": [t.to_dict() for t in shifts.list_shift_types()]})

    @app.route("/api/shift-types", methods=["POST"], endpoint="add_shift_type")
    @json_view
    @login_required
    def add_shift_type(ctx):
        body = json_body()
        shift_type = shifts.add_shift_type(
            name=body.get("name", ""),
            description=body.get("description", ""),
            location=body.get("location", ""),
            created_by=ctx.user_id,
        )
        return jsonify({"success": True, "shift_type": shift_type.to_dict()}), 201

    @app.route("/api/shift-types/<shift_type_id>", methods=["DELETE"], endpoint="delete_shift_type")
    @json_view
    @login_required
    def delete_shift_type(ctx, shift_type_id: str):
        shifts.delete_shift_type(shift_type_id)
        return jsonify({"success": True})
