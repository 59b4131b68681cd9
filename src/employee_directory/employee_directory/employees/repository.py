from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee records.

    ``create`` and ``update`` must raise ``DuplicateEmailError`` when the
    store's uniqueness constraint on ``email`` rejects the write.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        email: str,
        mobile: str,
        designation: str,
        gender: str,
        course: Sequence[str],
        image: Optional[str],
        created_at: datetime,
    ) -> Employee:
        raise NotImplementedError

    def update(self, employee_id: int, changes: Mapping[str, Any]) -> Optional[Employee]:
        """Apply ``changes`` and return the stored record, or None if absent."""

        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError

    def search(self, *, name_contains: str = "", offset: int = 0, limit: int = 10) -> Sequence[Employee]:
        """Case-insensitive substring match on name; empty string matches all."""

        raise NotImplementedError

    def count(self, *, name_contains: str = "") -> int:
        raise NotImplementedError
