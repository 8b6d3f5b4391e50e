from __future__ import annotations

from datetime import date
from typing import Any, Optional

from flask import Flask, jsonify, request

from ..common.web import json_errors, parse_text_arg, roles_required, to_json
from ..core.enums import EquipmentStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container


def _parse_status(value: Any) -> Optional[EquipmentStatus]:
    if value is None:
        return None
    try:
        return EquipmentStatus(str(value).strip().upper().replace(" ", "_"))
    except ValueError:
        allowed = ", ".join(s.value for s in EquipmentStatus)
        raise ValidationError(f"Invalid equipment status (allowed: {allowed})")


def _parse_date(value: Any) -> Optional[date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise ValidationError("last_service_date must look like YYYY-MM-DD")


def register(app: Flask, container: Container) -> None:
    staff = (Role.TRAINER, Role.ADMIN)

    @app.route("/api/equipment", methods=["GET"], endpoint="list_equipment")
    @roles_required(*staff)
    @json_errors
    def list_equipment():
        status = _parse_status(request.args.get("status"))
        if status is None:
            items = container.equipment_service.all_equipment()
        else:
            items = container.equipment_service.equipment_by_status(status)
        return jsonify(to_json(list(items)))

    @app.route("/api/equipment", methods=["POST"], endpoint="create_equipment")
    @roles_required(Role.ADMIN)
    @json_errors
    def create_equipment():
        data = request.get_json(silent=True) or {}
        item = container.equipment_service.create_equipment(
            parse_text_arg(data.get("name"), "name"),
            _parse_status(data.get("status")) or EquipmentStatus.AVAILABLE,
            _parse_date(data.get("last_service_date")),
        )
        return jsonify(to_json(item)), 201

    @app.route("/api/equipment/<int:equipment_id>", methods=["GET"], endpoint="get_equipment")
    @roles_required(*staff)
    @json_errors
    def get_equipment(equipment_id: int):
        return jsonify(to_json(container.equipment_service.get_equipment(equipment_id)))

    @app.route("/api/equipment/<int:equipment_id>", methods=["PUT"], endpoint="update_equipment")
    @roles_required(Role.ADMIN)
    @json_errors
    def update_equipment(equipment_id: int):
        data = request.get_json(silent=True) or {}
        item = container.equipment_service.update_equipment(
            equipment_id,
            name=parse_text_arg(data.get("name"), "name"),
            status=_parse_status(data.get("status")),
            last_service_date=_parse_date(data.get("last_service_date")),
        )
        return jsonify(to_json(item))

    @app.route("/api/equipment/<int:equipment_id>/status", methods=["POST"], endpoint="update_equipment_status")
    @roles_required(*staff)
    @json_errors
    def update_equipment_status(equipment_id: int):
        status = _parse_status((request.get_json(silent=True) or {}).get("status"))
        if status is None:
            raise ValidationError("status is required")
        return jsonify(to_json(container.equipment_service.update_status(equipment_id, status)))

    @app.route("/api/equipment/<int:equipment_id>/service", methods=["POST"], endpoint="mark_equipment_for_service")
    @roles_required(*staff)
    @json_errors
    def mark_equipment_for_service(equipment_id: int):
        return jsonify(to_json(container.equipment_service.mark_for_service(equipment_id)))
