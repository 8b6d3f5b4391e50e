from __future__ import annotations

from flask import Flask, jsonify, request, session

from ..common.web import current_role, json_errors, roles_required
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    @json_errors
    def login():
        data = request.get_json(silent=True) or request.form
        user = container.auth_service.authenticate(data.get("username", ""), data.get("password", ""))

        session.clear()
        session["user_id"] = user.user_id
        session["name"] = user.full_name
        session["role"] = user.role.value
        return jsonify({"success": True, "user_id": user.user_id, "name": user.full_name, "role": user.role.value})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True})

    @app.route("/api/register", methods=["POST"], endpoint="register_user")
    @json_errors
    def register_user():
        data = request.get_json(silent=True) or request.form
        try:
            role = Role(str(data.get("role", Role.MEMBER.value)).upper())
        except ValueError:
            raise ValidationError("Invalid account type")

        user_id = container.user_service.register(
            current_role=current_role(),
            full_name=data.get("full_name", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            role=role,
        )
        return jsonify({"success": True, "user_id": user_id}), 201

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @roles_required()
    def me():
        return jsonify({"user_id": session["user_id"], "name": session.get("name"), "role": session.get("role")})
