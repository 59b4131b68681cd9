from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .auth.token_service import TokenService
from .core.settings import Settings
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .uploads.service import ImageUploadService
from .uploads.storage import LocalImageStore
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    settings: Settings

    users_repo: UserRepository
    employees_repo: EmployeeRepository
    image_store: LocalImageStore

    token_service: TokenService
    upload_service: ImageUploadService
    auth_service: AuthService
    employee_service: EmployeeService

    conn: Optional[DatabaseConnection] = None


def build_services(
    settings: Settings,
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    image_store: Optional[LocalImageStore] = None,
    conn: Optional[DatabaseConnection] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> Container:
    """Wire services over the given repositories (MySQL in production, fakes in tests)."""

    image_store = image_store or LocalImageStore(settings.upload_dir)
    token_service = TokenService(settings.jwt_secret, ttl_seconds=settings.token_ttl_seconds, clock=clock)
    upload_service = ImageUploadService(image_store)

    return Container(
        settings=settings,
        users_repo=users_repo,
        employees_repo=employees_repo,
        image_store=image_store,
        token_service=token_service,
        upload_service=upload_service,
        auth_service=AuthService(users_repo, token_service),
        employee_service=EmployeeService(employees_repo, upload_service, clock=clock),
        conn=conn,
    )


def build_container(settings: Settings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_url(settings.database_url))
    return build_services(
        settings,
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        conn=conn,
    )
