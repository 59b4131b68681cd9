from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Mapping, Optional

from werkzeug.datastructures import FileStorage

from ..common.datetime_utils import now_utc
from ..common.validators import validate_employee_fields
from ..core.constants import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from ..core.exceptions import DuplicateEmailError, NotFoundError, ValidationError
from ..uploads.service import ImageUploadService, StoredImage
from .model import Employee, EmployeePage
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def has_file(image: Optional[FileStorage]) -> bool:
    return image is not None and bool(image.filename)


class EmployeeService:
    """Use cases: create/list/get/update/delete employee records.

    Order of checks on writes: field validation, then the image rules, then
    the duplicate-email fast path, then the image is stored and the row
    written. The store's UNIQUE key on ``email`` is the authoritative guard; a
    write it rejects removes the image stored for that request.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        uploads: ImageUploadService,
        *,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._employees = employees
        self._uploads = uploads
        self._clock = clock or now_utc

    def _store_image(self, image: Optional[FileStorage], base_url: str) -> Optional[StoredImage]:
        if not has_file(image):
            return None
        return self._uploads.store(image, base_url=base_url)

    def create(
        self,
        fields: Mapping[str, Any],
        *,
        image: Optional[FileStorage] = None,
        base_url: str = "",
        require_image: bool = False,
    ) -> Employee:
        clean = validate_employee_fields(fields, image=image, require_image=require_image)
        if has_file(image):
            self._uploads.validate(image)

        if self._employees.get_by_email(clean["email"]):
            raise DuplicateEmailError("Email already exists")

        stored = self._store_image(image, base_url)
        try:
            employee = self._employees.create(
                name=clean["name"],
                email=clean["email"],
                mobile=clean["mobile"],
                designation=clean["designation"],
                gender=clean["gender"],
                course=clean["course"],
                image=stored.url if stored else None,
                created_at=self._clock(),
            )
        except Exception:
            self._uploads.discard(stored)
            raise

        logger.info("Created employee id=%s", employee.employee_id)
        return employee

    def list_page(
        self,
        *,
        page: int = DEFAULT_PAGE,
        page_size: int = DEFAULT_PAGE_SIZE,
        search: str = "",
    ) -> EmployeePage:
        if page < 1 or page_size < 1:
            raise ValidationError("page and limit must be positive integers")

        search = (search or "").strip()
        total = self._employees.count(name_contains=search)
        items = self._employees.search(name_contains=search, offset=(page - 1) * page_size, limit=page_size)
        return EmployeePage(items=list(items), total_count=total, page=page, page_size=page_size)

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def update(
        self,
        employee_id: int,
        fields: Mapping[str, Any],
        *,
        image: Optional[FileStorage] = None,
        base_url: str = "",
    ) -> Employee:
        """Replace the provided fields; the image changes only if a new one is uploaded."""

        clean = validate_employee_fields(fields, partial=True)
        if has_file(image):
            self._uploads.validate(image)

        current = self.get(employee_id)

        if "email" in clean and clean["email"] != current.email:
            other = self._employees.get_by_email(clean["email"])
            if other and other.employee_id != employee_id:
                raise DuplicateEmailError("Email already exists")

        stored = self._store_image(image, base_url)
        if stored:
            clean["image"] = stored.url

        try:
            updated = self._employees.update(employee_id, clean)
        except Exception:
            self._uploads.discard(stored)
            raise

        if updated is None:
            # Removed by a concurrent request after the lookup above.
            self._uploads.discard(stored)
            raise NotFoundError("Employee not found")

        logger.info("Updated employee id=%s fields=%s", employee_id, sorted(clean))
        return updated

    def delete(self, employee_id: int) -> None:
        if not self._employees.delete_by_id(employee_id):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee id=%s", employee_id)
