from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class User:
    """Domain entity: a login credential.

    Note: plain data object (no DB access code). ``password_hash`` is a salted
    werkzeug hash; plaintext passwords are never stored.
    """

    user_id: int
    username: str
    password_hash: str
    created_at: Optional[datetime] = None

    def public_view(self) -> dict:
        return {"id": self.user_id, "username": self.username}
