"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI

from cookieseal.api.auth import require_session, router
from cookieseal.config import Settings, get_settings, resolve_secret_key
from cookieseal.security.session_tokens import SessionTokenCodec

__all__ = ["create_app", "require_session"]

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    codec: SessionTokenCodec | None = None,
) -> FastAPI:
    """Build the app with one shared session codec.

    *codec* overrides the one derived from *settings*; tests pass a codec with
    a fixed secret and clock.
    """
    if settings is None:
        settings = get_settings()
    if codec is None:
        codec = SessionTokenCodec(resolve_secret_key(settings))

    app = FastAPI(title="Cookieseal", docs_url="/docs", redoc_url=None)
    app.state.settings = settings
    app.state.session_codec = codec

    app.include_router(router)

    @app.get("/api/me", dependencies=[Depends(require_session)], tags=["Session"])
    async def whoami():
        return {"authenticated": True}

    if settings.access_password is None:
        logger.warning("COOKIESEAL_ACCESS_PASSWORD is not set; all logins will be refused")

    return app
