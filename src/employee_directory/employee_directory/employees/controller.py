from __future__ import annotations

from flask import Flask, jsonify, request

from ..auth.guard import token_required
from ..auth.model import AuthenticatedIdentity
from ..common.http import base_url, request_fields
from ..common.validators import parse_positive_int
from ..container import Container
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE, IMAGE_FIELD_NAME


def register(app: Flask, container: Container) -> None:
    login_required = token_required(container.token_service)
    employees = container.employee_service

    @app.route("/api/employees", methods=["POST"], endpoint="create_employee")
    @login_required
    def create_employee(identity: AuthenticatedIdentity):
        employee = employees.create(
            request_fields(),
            image=request.files.get(IMAGE_FIELD_NAME),
            base_url=base_url(),
        )
        app.logger.info("Employee %s created by user %s", employee.employee_id, identity.user_id)
        return jsonify({"message": "Employee created successfully", "employee": employee.to_dict()}), 201

    @app.route("/api/employees", methods=["GET"], endpoint="list_employees")
    @login_required
    def list_employees(identity: AuthenticatedIdentity):
        page = parse_positive_int(request.args.get("page"), default=DEFAULT_PAGE, field="page")
        limit = parse_positive_int(request.args.get("limit"), default=DEFAULT_PAGE_SIZE, field="limit")
        result = employees.list_page(page=page, page_size=limit, search=request.args.get("search", ""))
        return jsonify(result.to_dict()), 200

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    @login_required
    def get_employee(employee_id: int, identity: AuthenticatedIdentity):
        return jsonify({"employee": employees.get(employee_id).to_dict()}), 200

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: int, identity: AuthenticatedIdentity):
        employee = employees.update(
            employee_id,
            request_fields(),
            image=request.files.get(IMAGE_FIELD_NAME),
            base_url=base_url(),
        )
        app.logger.info("Employee %s updated by user %s", employee_id, identity.user_id)
        return jsonify({"message": "Employee updated successfully", "employee": employee.to_dict()}), 200

    @app.route("/api/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    @login_required
    def delete_employee(employee_id: int, identity: AuthenticatedIdentity):
        employees.delete(employee_id)
        app.logger.info("Employee %s deleted by user %s", employee_id, identity.user_id)
        return jsonify({"message": "Employee deleted successfully"}), 200

    if not container.settings.enable_legacy_routes:
        return

    @app.route("/employee", methods=["POST"], endpoint="legacy_create_employee")
    def legacy_create_employee():
        """Older form clients: the photo is a required field here."""

        employee = employees.create(
            request_fields(),
            image=request.files.get(IMAGE_FIELD_NAME),
            base_url=base_url(),
            require_image=True,
        )
        return jsonify({"message": "Employee created successfully", "employee": employee.to_dict()}), 201
