from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..container import Container
from ..core.exceptions import ValidationError
from ..web.http import date_arg, flag_arg, int_arg, json_body, json_view, make_login_required
from .exporter import XLSX_MIMETYPE, export_filename
from .mapping import record_from_payload

logger = logging.getLogger(__name__)


def _records_from_body(body: dict):
    items = body.get("records")
    if not isinstance(items, list):
        raise ValidationError("records must be a list")
    return [record_from_payload(item or {}) for item in items]


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.auth_service)
    attendance = container.attendance_service

    def _send_workbook(payload: bytes, filename: str):
        return send_file(
            io.BytesIO(payload),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=filename,
        )

    @app.route("/api/attendance/import", methods=["POST"], endpoint="import_attendance")
    @json_view
    @login_required
    def import_attendance(ctx):
        upload = request.files.get("file")
        if upload is None or not upload.filename:
            raise ValidationError("Please choose a spreadsheet to upload")

        stream = io.BytesIO(upload.read())
        if flag_arg(request.args.get("preview")):
            result = container.attendance_importer.preview(stream, upload.filename)
        else:
            result = container.attendance_importer.import_file(stream, upload.filename)
            logger.info("%s imported %d attendance records", ctx.email, result.record_count)
        return jsonify({"success": True, **result.to_dict()})

    @app.route("/api/attendance/export", methods=["GET"], endpoint="export_all_attendance")
    @json_view
    @login_required
    def export_all_attendance(ctx):
        start = date_arg(request.args.get("start"), "Start date")
        end = date_arg(request.args.get("end"), "End date")
        payload = container.attendance_exporter.build_workbook(attendance.export_groups(), start=start, end=end)
        return _send_workbook(payload, export_filename(None, start, end))

    @app.route("/api/attendance/<employee_id>/export", methods=["GET"], endpoint="export_attendance")
    @json_view
    @login_required
    def export_attendance(ctx, employee_id: str):
        start = date_arg(request.args.get("start"), "Start date")
        end = date_arg(request.args.get("end"), "End date")
        groups = attendance.export_groups(employee_id)
        payload = container.attendance_exporter.build_workbook(groups, start=start, end=end)
        return _send_workbook(payload, export_filename(groups[0].employee.name, start, end))

    @app.route("/api/attendance/<employee_id>", methods=["GET"], endpoint="view_attendance")
    @json_view
    @login_required
    def view_attendance(ctx, employee_id: str):
        page = attendance.view_page(
            employee_id,
            page=int_arg(request.args.get("page"), "page", 1),
            descending=flag_arg(request.args.get("descending")),
        )
        return jsonify({"success": True, **page.to_dict()})

    @app.route("/api/attendance/<employee_id>", methods=["PUT"], endpoint="save_attendance")
    @json_view
    @login_required
    def save_attendance(ctx, employee_id: str):
        records = attendance.save_records(employee_id, _records_from_body(json_body()))
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})

    @app.route("/api/attendance/<employee_id>/upsert", methods=["POST"], endpoint="upsert_attendance")
    @json_view
    @login_required
    def upsert_attendance(ctx, employee_id: str):
        records = attendance.upsert_records(employee_id, _records_from_body(json_body()))
        return jsonify({"success": True, "records": [r.to_dict() for r in records]})
