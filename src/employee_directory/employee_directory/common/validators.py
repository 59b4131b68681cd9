from __future__ import annotations

import re
from typing import Any, Mapping, Optional

from werkzeug.datastructures import FileStorage

from ..core.constants import ALLOWED_IMAGE_MIMETYPES
from ..core.exceptions import ValidationError

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[A-Za-z0-9-]{2,}$")
DIGITS_RE = re.compile(r"^[0-9]+$")

# (field, message when empty)
_REQUIRED_TEXT_FIELDS = (
    ("name", "Name is required"),
    ("designation", "Designation is required"),
    ("gender", "Gender is required"),
)


def field_error(field: str, message: str) -> dict:
    return {"field": field, "message": message}


def text_value(value: Any) -> Optional[str]:
    """Strip a submitted scalar; ``None`` for anything that is not text or a number."""

    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def normalize_courses(value: Any) -> Optional[list[str]]:
    """Course list from a string or a list; ``None`` when the shape is wrong."""

    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        return None
    courses = [text_value(v) for v in value]
    if any(c is None for c in courses):
        return None
    return [c for c in courses if c]


def _present(fields: Mapping[str, Any], name: str) -> bool:
    return name in fields and fields[name] is not None


def validate_credentials(username: Any, password: Any) -> tuple[str, str]:
    errors = []
    if username is not None and not isinstance(username, str):
        errors.append(field_error("username", "Username must be a string"))
    elif not (username or "").strip():
        errors.append(field_error("username", "Username is required"))
    if password is not None and not isinstance(password, str):
        errors.append(field_error("password", "Password must be a string"))
    elif not password:
        errors.append(field_error("password", "Password is required"))
    if errors:
        raise ValidationError("Validation failed", errors)
    return username.strip(), password


def image_presence_errors(image: Optional[FileStorage]) -> list[dict]:
    """Rules for flows where the photo itself is a required field."""

    if image is None or not image.filename:
        return [field_error("image", "No files were uploaded.")]
    mimetype = (image.mimetype or "").lower()
    if not mimetype.startswith("image/"):
        return [field_error("image", "Only image files are allowed.")]
    if mimetype not in ALLOWED_IMAGE_MIMETYPES:
        return [field_error("image", "Only .jpg and .png files are allowed.")]
    return []


def validate_employee_fields(
    fields: Mapping[str, Any],
    *,
    partial: bool = False,
    image: Optional[FileStorage] = None,
    require_image: bool = False,
) -> dict:
    """Check employee input and return the cleaned values.

    With ``partial=True`` (updates) only the fields that are present are
    checked and returned. Every violated rule is reported, not just the first.
    """

    errors: list[dict] = []
    clean: dict = {}

    for name, message in _REQUIRED_TEXT_FIELDS:
        if partial and not _present(fields, name):
            continue
        value = text_value(fields.get(name))
        if value:
            clean[name] = value
        else:
            errors.append(field_error(name, message))

    if not partial or _present(fields, "email"):
        email = (text_value(fields.get("email")) or "").lower()
        if EMAIL_RE.match(email):
            clean["email"] = email
        else:
            errors.append(field_error("email", "Please include a valid email"))

    if not partial or _present(fields, "mobile"):
        mobile = text_value(fields.get("mobile")) or ""
        if DIGITS_RE.match(mobile):
            clean["mobile"] = mobile
        else:
            errors.append(field_error("mobile", "Mobile number must be numeric"))

    if not partial or _present(fields, "course"):
        courses = normalize_courses(fields.get("course"))
        if courses is None:
            errors.append(field_error("course", "Course must be a list of strings"))
        elif courses:
            clean["course"] = courses
        else:
            errors.append(field_error("course", "Course is required"))

    if require_image:
        errors.extend(image_presence_errors(image))

    if errors:
        raise ValidationError("Validation failed", errors)
    return clean


def parse_positive_int(value: Any, *, default: int, field: str) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError("Validation failed", [field_error(field, f"{field} must be a positive integer")])
    if number < 1:
        raise ValidationError("Validation failed", [field_error(field, f"{field} must be a positive integer")])
    return number
