from __future__ import annotations

from functools import wraps

from flask import request

from ..core.exceptions import InvalidTokenError
from .token_service import TokenService

BEARER_SCHEME = "bearer"


def bearer_token_from_header(header: str) -> str:
    header = (header or "").strip()
    scheme, _, rest = header.partition(" ")
    token = rest.strip() if scheme.lower() == BEARER_SCHEME else header
    if not token:
        raise InvalidTokenError("Access denied. No token provided.")
    return token


def token_required(tokens: TokenService):
    """Build a view decorator that verifies the bearer token first.

    The decoded :class:`AuthenticatedIdentity` is passed to the view as the
    ``identity`` keyword argument. Failures raise ``InvalidTokenError`` which
    the app-wide error handlers turn into a 401.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token_from_header(request.headers.get("Authorization", ""))
            kwargs["identity"] = tokens.verify(token)
            return view(*args, **kwargs)

        return wrapper

    return decorator
