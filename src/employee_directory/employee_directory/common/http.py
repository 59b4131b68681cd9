from __future__ import annotations

from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import DomainError, InvalidFileError, StoreError, ValidationError


def request_fields() -> dict:
    """Collect body fields from JSON or form data; ``course`` may repeat."""

    if request.is_json:
        data = request.get_json(silent=True)
        return dict(data) if isinstance(data, dict) else {}

    form = request.form
    fields = {key: form.get(key) for key in form.keys() if not key.endswith("[]")}
    courses = form.getlist("course") + form.getlist("course[]")
    if courses:
        fields["course"] = courses
    return fields


def base_url() -> str:
    return request.host_url


def register_error_handlers(app: Flask) -> None:
    """Map the domain exception taxonomy onto JSON responses.

    Every body carries ``message``; validation and file failures add ``errors``.
    """

    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        body = {"message": str(e)}
        if isinstance(e, ValidationError):
            body["errors"] = e.errors
        elif isinstance(e, InvalidFileError):
            body["errors"] = [{"field": "image", "message": reason} for reason in e.reasons]

        if isinstance(e, StoreError):
            app.logger.error("Storage failure on %s %s: %s", request.method, request.path, e)
            body = {"message": "Server error"}
            if app.config.get("DEBUG"):
                body["error"] = str(e)

        return jsonify(body), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        app.logger.exception("Unhandled error on %s %s", request.method, request.path)
        body = {"message": "Server error"}
        if app.config.get("DEBUG"):
            body["error"] = str(e)
        return jsonify(body), 500
