from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Who a verified bearer token speaks for."""

    user_id: int
    username: str
