from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

import mysql.connector

from ..core.exceptions import DuplicateEmailError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, escape_like, fetchall, fetchone, is_duplicate_key
from .model import MUTABLE_FIELDS, Employee
from .repository import EmployeeRepository

_EMPLOYEE_COLUMNS = "employee_id, name, email, mobile, designation, gender, course, image, created_at"
_NAME_FILTER = "LOWER(name) LIKE %s ESCAPE '\\\\'"


def _decode_courses(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value) if value else []
    return tuple(str(v) for v in value)


def _row_to_employee(row: dict) -> Employee:
    created_at = row.get("created_at")
    if isinstance(created_at, datetime) and created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    return Employee(
        employee_id=int(row["employee_id"]),
        name=row["name"],
        email=row["email"],
        mobile=row["mobile"],
        designation=row["designation"],
        gender=row["gender"],
        course=_decode_courses(row.get("course")),
        image=row.get("image"),
        created_at=created_at,
    )


def _to_db_datetime(value: datetime) -> datetime:
    # DATETIME columns are naive UTC.
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def _like_pattern(name_contains: str) -> str:
    return f"%{escape_like(name_contains.lower())}%"


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE email=%s", (email,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

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
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    INSERT INTO employees(name, email, mobile, designation, gender, course, image, created_at)
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (name, email, mobile, designation, gender, json.dumps(list(course)), image, _to_db_datetime(created_at)),
                )
            except mysql.connector.IntegrityError as e:
                if is_duplicate_key(e):
                    raise DuplicateEmailError("Email already exists") from e
                raise
            employee_id = int(cur.lastrowid)

        return Employee(
            employee_id=employee_id,
            name=name,
            email=email,
            mobile=mobile,
            designation=designation,
            gender=gender,
            course=tuple(course),
            image=image,
            created_at=created_at,
        )

    def update(self, employee_id: int, changes: Mapping[str, Any]) -> Optional[Employee]:
        columns = [c for c in MUTABLE_FIELDS if c in changes]

        with db_cursor(self._conn_factory) as (_, cur):
            if columns:
                values = [json.dumps(list(changes[c])) if c == "course" else changes[c] for c in columns]
                assignments = ", ".join(f"{c}=%s" for c in columns)
                try:
                    cur.execute(
                        f"UPDATE employees SET {assignments} WHERE employee_id=%s",
                        (*values, employee_id),
                    )
                except mysql.connector.IntegrityError as e:
                    if is_duplicate_key(e):
                        raise DuplicateEmailError("Email already exists") from e
                    raise

            cur.execute(f"SELECT {_EMPLOYEE_COLUMNS} FROM employees WHERE employee_id=%s", (employee_id,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE employee_id=%s", (employee_id,))
            return cur.rowcount > 0

    def search(self, *, name_contains: str = "", offset: int = 0, limit: int = 10) -> Sequence[Employee]:
        where = f"WHERE {_NAME_FILTER}" if name_contains else ""
        params: tuple = (_like_pattern(name_contains),) if name_contains else ()

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_EMPLOYEE_COLUMNS}
                FROM employees
                {where}
                ORDER BY employee_id ASC
                LIMIT %s OFFSET %s
                """,
                (*params, int(limit), int(offset)),
            )
            return [_row_to_employee(r) for r in fetchall(cur)]

    def count(self, *, name_contains: str = "") -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            if name_contains:
                cur.execute(f"SELECT COUNT(*) AS c FROM employees WHERE {_NAME_FILTER}", (_like_pattern(name_contains),))
            else:
                cur.execute("SELECT COUNT(*) AS c FROM employees")
            row = fetchone(cur)
            return int(row["c"]) if row else 0
