from __future__ import annotations

from typing import Optional, Protocol

from .model import User


class UserRepository(Protocol):
    """Repository interface for User credentials.

    Note: the service layer depends on this interface, not on a concrete DB.
    ``create_user`` must raise ``DuplicateUsernameError`` when the store's
    uniqueness constraint rejects the username.
    """

    def get_by_username(self, username: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(self, *, username: str, password_hash: str) -> int:
        raise NotImplementedError
