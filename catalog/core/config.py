"""
Configuration helpers for the catalog backend.

Settings are read once from environment variables so that routers/services
never touch os.environ directly. Tests build a Settings instance by hand and
hand it to the app factory.
"""

from dataclasses import dataclass, field
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str = "dev"
    database_url: str = ""
    jwt_secret: str = "change-me"
    jwt_algorithm: str = "HS256"
    access_token_ttl_seconds: int = 3600
    slug_max_attempts: int = 100
    log_level: str = "INFO"
    cors_origins: tuple[str, ...] = field(default_factory=tuple)
    login_rate_limit: int = 10
    login_rate_window_seconds: int = 60
    register_rate_limit: int = 10
    register_rate_window_seconds: int = 300

    def rate_limit(self, scope: str) -> tuple[int, int]:
        """(attempts, window seconds) for an auth endpoint scope."""
        if scope == "register":
            return self.register_rate_limit, self.register_rate_window_seconds
        return self.login_rate_limit, self.login_rate_window_seconds


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _csv(value: str | None) -> tuple[str, ...]:
        return tuple(item.strip().rstrip("/") for item in (value or "").split(",") if item.strip())

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        database_url=os.getenv("DATABASE_URL", ""),
        jwt_secret=os.getenv("JWT_SECRET", "change-me"),
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_ttl_seconds=_int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "3600"), 3600),
        slug_max_attempts=max(1, _int(os.getenv("SLUG_MAX_ATTEMPTS", "100"), 100)),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        cors_origins=_csv(os.getenv("CORS_ORIGINS")),
        login_rate_limit=_int(os.getenv("LOGIN_RATE_LIMIT", "10"), 10),
        login_rate_window_seconds=_int(os.getenv("LOGIN_RATE_WINDOW_SECONDS", "60"), 60),
        register_rate_limit=_int(os.getenv("REGISTER_RATE_LIMIT", "10"), 10),
        register_rate_window_seconds=_int(os.getenv("REGISTER_RATE_WINDOW_SECONDS", "300"), 300),
    )
