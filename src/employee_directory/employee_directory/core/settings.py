from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType

from .constants import DEFAULT_MAX_CONTENT_LENGTH, DEFAULT_PORT, DEFAULT_TOKEN_TTL_SECONDS
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class Settings:
    """Process-wide configuration, read once at startup and never mutated."""

    jwt_secret: str
    database_url: str
    port: int = DEFAULT_PORT
    upload_dir: str = "uploads"
    token_ttl_seconds: int = DEFAULT_TOKEN_TTL_SECONDS
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH
    auto_init_db: bool = False
    enable_legacy_routes: bool = False
    log_level: str = "INFO"
    debug: bool = False
    testing: bool = False


def _required(settings: ModuleType, name: str) -> str:
    value = getattr(settings, name, None)
    if value is None or not str(value).strip():
        raise ConfigurationError(f"{name} must be set")
    return str(value)


def load_settings(settings: ModuleType) -> Settings:
    """Freeze a ``config.*`` settings module into :class:`Settings`.

    A missing ``JWT_SECRET`` or ``DATABASE_URL`` is fatal.
    """

    try:
        port = int(getattr(settings, "PORT", DEFAULT_PORT))
        ttl = int(getattr(settings, "TOKEN_TTL_SECONDS", DEFAULT_TOKEN_TTL_SECONDS))
        max_len = int(getattr(settings, "MAX_CONTENT_LENGTH", DEFAULT_MAX_CONTENT_LENGTH))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid numeric setting: {e}") from e

    return Settings(
        jwt_secret=_required(settings, "JWT_SECRET"),
        database_url=_required(settings, "DATABASE_URL"),
        port=port,
        upload_dir=str(getattr(settings, "UPLOAD_DIR", "uploads")),
        token_ttl_seconds=ttl,
        max_content_length=max_len,
        auto_init_db=bool(getattr(settings, "AUTO_INIT_DB", False)),
        enable_legacy_routes=bool(getattr(settings, "ENABLE_LEGACY_ROUTES", False)),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        debug=bool(getattr(settings, "DEBUG", False)),
        testing=bool(getattr(settings, "TESTING", False)),
    )
