from __future__ import annotations

from flask import Flask, jsonify

from ..container import Container
from ..web.http import date_arg, json_body, json_view, make_login_required


def _employee_fields(body: dict) -> dict:
    return {
        "name": body.get("name", ""),
        "staff_id": body.get("staff_id", ""),
        "position": body.get("position", ""),
        "department": body.get("department", ""),
        "contact_number": body.get("contact_number", ""),
        "joined_date": date_arg(body.get("joined_date"), "Joined date"),
    }


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)
    employees = container.employee_service

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @json_view
    @login_required
    def list_employees(ctx):
        return jsonify({"success": True, "employees": [e.to_dict() for e in employees.list_employees()]})

    @app.route("/api/employees", methods=["POST"], endpoint="add_employee")
    @json_view
    @login_required
    def add_employee(ctx):
        employee = employees.add_employee(**_employee_fields(json_body()))
        return jsonify({"success": True, "employee": employee.to_dict()}), 201

    @app.route("/api/employees/<employee_id>", methods=["GET"], endpoint="get_employee")
    @json_view
    @login_required
    def get_employee(ctx, employee_id: str):
        return jsonify({"success": True, "employee": employees.get_employee(employee_id).to_dict()})

    @app.route("/api/employees/<employee_id>", methods=["PUT"], endpoint="edit_employee")
    @json_view
    @login_required
    def edit_employee(ctx, employee_id: str):
        employee = employees.edit_employee(employee_id, **_employee_fields(json_body()))
        return jsonify({"success": True, "employee": employee.to_dict()})
