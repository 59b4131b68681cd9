from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import to_iso

# Columns a client may change; everything else is owned by the system.
MUTABLE_FIELDS = ("name", "email", "mobile", "designation", "gender", "course", "image")


@dataclass(frozen=True)
class Employee:
    """Domain entity: an employee record."""

    employee_id: int
    name: str
    email: str
    mobile: str
    designation: str
    gender: str
    course: tuple[str, ...]
    image: Optional[str]
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.employee_id,
            "name": self.name,
            "email": self.email,
            "mobile": self.mobile,
            "designation": self.designation,
            "gender": self.gender,
            "course": list(self.course),
            "image": self.image,
            "createdAt": to_iso(self.created_at),
        }


@dataclass(frozen=True)
class EmployeePage:
    """One page of a (possibly filtered) employee listing."""

    items: Sequence[Employee]
    total_count: int
    page: int
    page_size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_count / self.page_size) if self.page_size else 0

    def to_dict(self) -> dict:
        return {
            "employees": [e.to_dict() for e in self.items],
            "totalPages": self.total_pages,
            "currentPage": self.page,
            "totalCount": self.total_count,
        }
