from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash

from ..auth.model import AuthenticatedIdentity
from ..auth.token_service import TokenService
from ..common.validators import validate_credentials
from ..core.exceptions import AuthenticationError, DuplicateUsernameError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid username or password"

# Compared against when the username is unknown so both failure paths do the same work.
_DUMMY_HASH = generate_password_hash("not-a-real-password")


@dataclass(frozen=True)
class LoginResult:
    """What the login endpoint hands back to the client."""

    token: str
    user: User


class AuthService:
    """Use cases: register a credential, authenticate, log in (issue a token)."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(self, username: Any, password: Any) -> int:
        username, password = validate_credentials(username, password)

        # Fast path only; the UNIQUE key on users.username is authoritative.
        if self._users.get_by_username(username):
            raise DuplicateUsernameError("Username already taken")

        user_id = self._users.create_user(username=username, password_hash=generate_password_hash(password))
        logger.info("Registered user id=%s", user_id)
        return user_id

    def authenticate(self, username: Any, password: Any) -> User:
        username = username.strip() if isinstance(username, str) else ""
        password = password if isinstance(password, str) else ""
        user = self._users.get_by_username(username) if username else None

        try:
            ok = check_password_hash(user.password_hash if user else _DUMMY_HASH, password)
        except ValueError:
            # e.g. placeholder or corrupted hash values
            ok = False

        if not user or not ok:
            logger.info("Rejected login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS)
        return user

    def login(self, username: Any, password: Any) -> LoginResult:
        user = self.authenticate(username, password)
        token = self._tokens.issue(AuthenticatedIdentity(user_id=user.user_id, username=user.username))
        logger.info("User id=%s logged in", user.user_id)
        return LoginResult(token=token, user=user)
