from __future__ import annotations

import tempfile
from datetime import datetime
from pathlib import Path

from flask import Flask, jsonify, request, send_file

from ..common.web import (
    current_role,
    current_user_id,
    json_errors,
    parse_int_arg,
    parse_text_arg,
    roles_required,
    save_upload,
    to_json,
)
from ..core.constants import UNASSIGNED_ID
from ..core.enums import Role
from ..core.exceptions import AuthorizationError
from ..container import Container
from .model import WorkoutPlan

_TEXT_FIELDS = ("title", "description", "difficulty", "muscle_group", "workout_type", "equipment_needed")
_INT_FIELDS = ("duration_minutes", "target_sets", "target_reps", "rest_seconds")


def _changes_from_json(data: dict) -> dict:
    changes = {name: parse_text_arg(data[name], name) for name in _TEXT_FIELDS if name in data}
    for name in _INT_FIELDS:
        if name in data:
            changes[name] = parse_int_arg(data[name], name, required=False)
    for name in ("member_id", "trainer_id"):
        if name in data:
            changes[name] = parse_int_arg(data[name], name)
    return changes


def register(app: Flask, container: Container) -> None:
    staff = (Role.TRAINER, Role.ADMIN)

    def _can_see(plan: WorkoutPlan) -> bool:
        role = current_role()
        if role == Role.ADMIN:
            return True
        if role == Role.TRAINER:
            return plan.trainer_id == current_user_id()
        return plan.member_id == current_user_id()

    def _require_owner(plan: WorkoutPlan) -> None:
        if current_role() == Role.TRAINER and plan.trainer_id != current_user_id():
            raise AuthorizationError("You can only change your own plans")

    @app.route("/api/workout-plans", methods=["GET"], endpoint="list_workout_plans")
    @roles_required()
    @json_errors
    def list_workout_plans():
        role = current_role()
        member_id = parse_int_arg(request.args.get("member_id"), "member_id", required=False)

        if role == Role.MEMBER:
            plans = container.workout_plan_service.plans_for_member(current_user_id())
        elif member_id is not None:
            plans = container.workout_plan_service.plans_for_member(member_id)
            if role == Role.TRAINER:
                plans = [p for p in plans if p.trainer_id == current_user_id()]
        elif role == Role.TRAINER:
            plans = container.workout_plan_service.plans_for_trainer(current_user_id())
        else:
            plans = container.workout_plan_service.all_plans()
        return jsonify(to_json(list(plans)))

    @app.route("/api/workout-plans", methods=["POST"], endpoint="create_workout_plan")
    @roles_required(*staff)
    @json_errors
    def create_workout_plan():
        data = request.get_json(silent=True) or {}
        changes = _changes_from_json(data)
        if current_role() == Role.TRAINER:
            changes["trainer_id"] = current_user_id()

        plan = WorkoutPlan(
            plan_id=UNASSIGNED_ID,
            member_id=changes.pop("member_id", UNASSIGNED_ID),
            trainer_id=changes.pop("trainer_id", UNASSIGNED_ID),
            title=changes.pop("title", ""),
            **changes,
        )
        created = container.workout_plan_service.create_plan(plan)
        return jsonify(to_json(created)), 201

    @app.route("/api/workout-plans/<int:plan_id>", methods=["GET"], endpoint="get_workout_plan")
    @roles_required()
    @json_errors
    def get_workout_plan(plan_id: int):
        plan = container.workout_plan_service.get_plan(plan_id)
        if not _can_see(plan):
            raise AuthorizationError("You do not have permission")
        return jsonify(to_json(plan))

    @app.route("/api/workout-plans/<int:plan_id>", methods=["PUT"], endpoint="update_workout_plan")
    @roles_required(*staff)
    @json_errors
    def update_workout_plan(plan_id: int):
        _require_owner(container.workout_plan_service.get_plan(plan_id))
        changes = _changes_from_json(request.get_json(silent=True) or {})
        if current_role() == Role.TRAINER:
            changes.pop("trainer_id", None)
        updated = container.workout_plan_service.update_plan(plan_id, **changes)
        return jsonify(to_json(updated))

    @app.route("/api/workout-plans/<int:plan_id>", methods=["DELETE"], endpoint="delete_workout_plan")
    @roles_required(*staff)
    @json_errors
    def delete_workout_plan(plan_id: int):
        _require_owner(container.workout_plan_service.get_plan(plan_id))
        container.workout_plan_service.delete_plan(plan_id)
        return jsonify({"success": True})

    @app.route("/workout-plans/export.csv", methods=["GET"], endpoint="export_workout_plans")
    @roles_required(*staff)
    @json_errors
    def export_workout_plans():
        trainer_id = current_user_id() if current_role() == Role.TRAINER else None
        filename = f"workout_templates_{datetime.now().strftime('%Y%m%d_%H%M%S')}.csv"
        path = container.workout_plan_service.export_templates(
            Path(app.config["EXPORT_DIR"]) / filename,
            trainer_id=trainer_id,
        )
        return send_file(path.resolve(), mimetype="text/csv", as_attachment=True, download_name=filename)

    @app.route("/workout-plans/import", methods=["POST"], endpoint="import_workout_plans")
    @roles_required(Role.ADMIN)
    @json_errors
    def import_workout_plans():
        with tempfile.TemporaryDirectory() as tmp:
            path = save_upload(request.files.get("file"), tmp)
            saved = container.workout_plan_service.import_templates(path)
        return jsonify({"success": True, "imported": len(saved), "plans": to_json(saved)})

    def _require_can_complete(plan: WorkoutPlan, class_session_id) -> None:
        if plan.member_id == current_user_id():
            return
        if class_session_id is not None:
            session = container.class_session_service.get_session(class_session_id)
            if session.workout_plan_id == plan.plan_id:
                return
        raise AuthorizationError("This workout plan is not assigned to you")

    @app.route("/api/workout-plans/<int:plan_id>/complete", methods=["POST"], endpoint="complete_workout_plan")
    @roles_required(Role.MEMBER)
    @json_errors
    def complete_workout_plan(plan_id: int):
        data = request.get_json(silent=True) or {}
        class_session_id = parse_int_arg(data.get("class_session_id"), "class_session_id", required=False)
        _require_can_complete(container.workout_plan_service.get_plan(plan_id), class_session_id)

        completion = container.workout_completion_service.mark_completed(
            plan_id,
            current_user_id(),
            class_session_id=class_session_id,
            notes=parse_text_arg(data.get("notes"), "notes"),
        )
        return jsonify(to_json(completion)), 201

    @app.route("/api/workout-plans/<int:plan_id>/complete", methods=["DELETE"], endpoint="uncomplete_workout_plan")
    @roles_required(Role.MEMBER)
    @json_errors
    def uncomplete_workout_plan(plan_id: int):
        container.workout_completion_service.unmark_completed(plan_id, current_user_id())
        return jsonify({"success": True})

    @app.route("/api/workout-completions", methods=["GET"], endpoint="list_workout_completions")
    @roles_required()
    @json_errors
    def list_workout_completions():
        if current_role() == Role.MEMBER:
            member_id = current_user_id()
        else:
            member_id = parse_int_arg(request.args.get("member_id"), "member_id")
        completions = container.workout_completion_service.completions_for_member(member_id)
        return jsonify(to_json(list(completions)))
