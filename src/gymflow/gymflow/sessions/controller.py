from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    current_role,
    current_user_id,
    json_errors,
    parse_datetime_arg,
    parse_int_arg,
    parse_text_arg,
    roles_required,
    to_json,
)
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..container import Container
from .model import ClassSession


def _changes_from_json(data: dict) -> dict:
    changes = {}
    if "title" in data:
        changes["title"] = parse_text_arg(data["title"], "title")
    if "schedule_at" in data:
        changes["schedule_at"] = parse_datetime_arg(data["schedule_at"], "schedule_at")
    if "capacity" in data:
        changes["capacity"] = parse_int_arg(data["capacity"], "capacity")
    if "workout_plan_id" in data:
        changes["workout_plan_id"] = parse_int_arg(data["workout_plan_id"], "workout_plan_id", required=False)
    return changes


def register(app: Flask, container: Container) -> None:
    staff = (Role.TRAINER, Role.ADMIN)

    def _require_owner(session: ClassSession) -> None:
        if current_role() == Role.TRAINER and session.trainer_id != current_user_id():
            raise AuthorizationError("You can only change your own classes")

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    @roles_required()
    @json_errors
    def list_sessions():
        svc = container.class_session_service
        trainer_id = parse_int_arg(request.args.get("trainer_id"), "trainer_id", required=False)

        if request.args.get("upcoming", "0").lower() in {"1", "true", "yes"}:
            sessions = svc.upcoming_sessions()
            if trainer_id is not None:
                sessions = [s for s in sessions if s.trainer_id == trainer_id]
        elif trainer_id is not None:
            sessions = svc.sessions_for_trainer(trainer_id)
        else:
            sessions = svc.all_sessions()
        return jsonify(to_json(list(sessions)))

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    @roles_required(*staff)
    @json_errors
    def create_session():
        data = request.get_json(silent=True) or {}
        if current_role() == Role.TRAINER:
            trainer_id = current_user_id()
        else:
            trainer_id = parse_int_arg(data.get("trainer_id"), "trainer_id")

        session = container.class_session_service.create_session(
            trainer_id=trainer_id,
            title=parse_text_arg(data.get("title"), "title"),
            schedule_at=parse_datetime_arg(data.get("schedule_at"), "schedule_at"),
            capacity=parse_int_arg(data.get("capacity"), "capacity"),
            workout_plan_id=parse_int_arg(data.get("workout_plan_id"), "workout_plan_id", required=False),
        )
        return jsonify(to_json(session)), 201

    @app.route("/api/sessions/<int:session_id>", methods=["GET"], endpoint="get_session")
    @roles_required()
    @json_errors
    def get_session(session_id: int):
        return jsonify(to_json(container.class_session_service.get_session(session_id)))

    @app.route("/api/sessions/<int:session_id>", methods=["PUT"], endpoint="update_session")
    @roles_required(*staff)
    @json_errors
    def update_session(session_id: int):
        _require_owner(container.class_session_service.get_session(session_id))
        changes = _changes_from_json(request.get_json(silent=True) or {})
        updated = container.class_session_service.update_session(session_id, **changes)
        return jsonify(to_json(updated))

    @app.route("/api/sessions/<int:session_id>", methods=["DELETE"], endpoint="delete_session")
    @roles_required(*staff)
    @json_errors
    def delete_session(session_id: int):
        _require_owner(container.class_session_service.get_session(session_id))
        container.class_session_service.delete_session(session_id)
        return jsonify({"success": True})
