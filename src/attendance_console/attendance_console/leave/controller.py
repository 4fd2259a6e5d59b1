from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container
from ..web.http import json_body, json_view, make_login_required


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)
    leave = container.leave_service

    @app.route("/api/leave-plans", methods=["GET"], endpoint="list_leave_plans")
    @json_view
    @login_required
    def list_leave_plans(ctx):
        plans = leave.list_plans(request.args.get("employee_id") or None)
        return jsonify({"success": True, "plans": [p.to_dict() for p in plans]})

    @app.route("/api/leave-plans", methods=["POST"], endpoint="add_leave_plan")
    @json_view
    @login_required
    def add_leave_plan(ctx):
        body = json_body()
        plan = leave.add_plan(
            body.get("employee_id"),
            body.get("leave_type"),
            body.get("start_date"),
            body.get("end_date"),
            created_by=ctx.user_id,
        )
        return jsonify({"success": True, "plan": plan.to_dict()}), 201

    @app.route("/api/leave-plans/<plan_id>", methods=["DELETE"], endpoint="delete_leave_plan")
    @json_view
    @login_required
    def delete_leave_plan(ctx, plan_id: str):
        leave.delete_plan(plan_id)
        return jsonify({"success": True})

    @app.route("/api/leave-plans/usage/<employee_id>", methods=["GET"], endpoint="leave_usage")
    @json_view
    @login_required
    def leave_usage(ctx, employee_id: str):
        return jsonify({"success": True, "usage": leave.usage_summary(employee_id)})
