from __future__ import annotations

from datetime import datetime, timedelta
from typing import Callable, Optional

import jwt

from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_TOKEN_TTL_SECONDS, TOKEN_ALGORITHM
from ..core.exceptions import ConfigurationError, InvalidTokenError, TokenExpiredError
from .model import AuthenticatedIdentity


class TokenService:
    """Issue and verify signed, time-limited bearer tokens (JWT, HS256).

    Tokens carry ``userId``, ``username``, ``iat`` and ``exp``. There is no
    revocation list; expiry is the only way a token stops working.
    """

    def __init__(
        self,
        secret: str,
        *,
        ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if not secret:
            raise ConfigurationError("JWT_SECRET must be set")
        self._secret = secret
        self._ttl = timedelta(seconds=int(ttl_seconds))
        self._clock = clock or now_utc

    def issue(self, identity: AuthenticatedIdentity) -> str:
        now = self._clock()
        payload = {
            "userId": identity.user_id,
            "username": identity.username,
            "iat": int(now.timestamp()),
            "exp": int((now + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=TOKEN_ALGORITHM)

    def verify(self, token: str) -> AuthenticatedIdentity:
        if not token:
            raise InvalidTokenError("Invalid token.")
        try:
            # Expiry is checked below against the injected clock.
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"verify_exp": False, "verify_iat": False, "require": ["exp", "userId"]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError("Invalid token.") from e

        try:
            exp = int(payload["exp"])
            user_id = int(payload["userId"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError("Invalid token.") from e

        if self._clock().timestamp() >= exp:
            raise TokenExpiredError("Token expired.")

        return AuthenticatedIdentity(user_id=user_id, username=str(payload.get("username") or ""))
