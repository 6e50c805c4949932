"""Process configuration.

Values come from ``COOKIESEAL_*`` environment variables or a ``.env`` file.
Only the secret key, the login password and server options are configurable;
the session length, cookie name and cookie attributes are fixed.
"""

import logging
import secrets
from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

EPHEMERAL_SECRET_BYTES = 32


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COOKIESEAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # HMAC key for session tokens. Unset means a random per-process key.
    session_secret_key: SecretStr | None = None

    # Password accepted by POST /auth/login
    access_password: SecretStr | None = None

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def load(cls) -> "Settings":
        return cls()


@lru_cache
def get_settings() -> Settings:
    """Get the process-wide settings instance."""
    return Settings.load()


@lru_cache(maxsize=1)
def _ephemeral_secret() -> bytes:
    logger.warning(
        "No COOKIESEAL_SESSION_SECRET_KEY set; generated a random session secret. "
        "All sessions will be invalidated when this process restarts. "
        "Set COOKIESEAL_SESSION_SECRET_KEY to keep sessions across restarts."
    )
    return secrets.token_bytes(EPHEMERAL_SECRET_BYTES)


def resolve_secret_key(settings: Settings) -> bytes:
    """Return the configured secret, or the random one generated for this process."""
    if settings.session_secret_key is not None:
        value = settings.session_secret_key.get_secret_value()
        if value:
            return value.encode("utf-8")
    return _ephemeral_secret()
