from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import request_fields
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="api_register")
    def api_register():
        data = request_fields()
        container.auth_service.register(data.get("username"), data.get("password"))
        return jsonify({"message": "User registered successfully"}), 201

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def api_login():
        data = request_fields()
        result = container.auth_service.login(data.get("username"), data.get("password"))
        return jsonify({"message": "Login successful", "token": result.token, "user": result.user.public_view()}), 200

    if not container.settings.enable_legacy_routes:
        return

    @app.route("/login", methods=["POST"], endpoint="legacy_login")
    def legacy_login():
        """Older clients: same hashed-credential check, answers without a token."""

        data = request_fields()
        user = container.auth_service.authenticate(data.get("username"), data.get("password"))
        return jsonify({"user": user.public_view()}), 200
