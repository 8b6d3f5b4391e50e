from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

from flask import Flask, jsonify, request, send_file

from ..common.web import current_role, current_user_id, json_errors, parse_int_arg, roles_required, save_upload, to_json
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..container import Container
from ..transfer.attendance_csv import parse_attended


def register(app: Flask, container: Container) -> None:
    staff = (Role.TRAINER, Role.ADMIN)

    @app.route("/api/attendance", methods=["POST"], endpoint="mark_attendance")
    @roles_required(*staff)
    @json_errors
    def mark_attendance():
        data = request.get_json(silent=True) or {}
        attended = data.get("attended", True)
        if isinstance(attended, str):
            attended = parse_attended(attended)

        record = container.attendance_service.mark_attendance(
            parse_int_arg(data.get("session_id"), "session_id"),
            parse_int_arg(data.get("member_id"), "member_id"),
            bool(attended),
        )
        return jsonify(to_json(record))

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="get_attendance")
    @roles_required()
    @json_errors
    def get_attendance(attendance_id: int):
        record = container.attendance_service.get_by_id(attendance_id)
        if current_role() == Role.MEMBER and record.member_id != current_user_id():
            raise AuthorizationError("You do not have permission")
        return jsonify(to_json(record))

    @app.route("/api/attendance/session/<int:session_id>", methods=["GET"], endpoint="session_attendance")
    @roles_required(*staff)
    @json_errors
    def session_attendance(session_id: int):
        records = container.attendance_service.get_for_session(session_id)
        attended = sum(1 for r in records if r.attended)
        return jsonify({"session_id": session_id, "attended_count": attended, "records": to_json(list(records))})

    @app.route("/api/attendance/member/<int:member_id>", methods=["GET"], endpoint="member_attendance")
    @roles_required()
    @json_errors
    def member_attendance(member_id: int):
        if current_role() == Role.MEMBER and member_id != current_user_id():
            raise AuthorizationError("You do not have permission")
        records = container.attendance_service.get_for_member(member_id)
        return jsonify(to_json(list(records)))

    @app.route("/attendance/export.csv", methods=["GET"], endpoint="export_attendance")
    @roles_required(*staff)
    @json_errors
    def export_attendance():
        named = request.args.get("named", "0").lower() in {"1", "true", "yes"}
        prefix = "attendance_named" if named else "attendance_report"
        filename = f"{prefix}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        path = container.attendance_service.export_report(Path(app.config["EXPORT_DIR"]) / filename, named=named)
        return send_file(path.resolve(), mimetype="text/csv", as_attachment=True, download_name=filename)

    @app.route("/attendance/import", methods=["POST"], endpoint="import_attendance")
    @roles_required(Role.ADMIN)
    @json_errors
    def import_attendance():
        with tempfile.TemporaryDirectory() as tmp:
            path = save_upload(request.files.get("file"), tmp)
            saved = container.attendance_service.import_report(path)
        return jsonify({"success": True, "imported": len(saved)})
