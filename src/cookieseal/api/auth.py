# Auth router: cookie login, logout, session status.
#
# The codec lives on app.state so every route in one app shares a secret.

from __future__ import annotations

import hmac
import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from cookieseal.api.schemas import LoginRequest, OkResponse, SessionStatusResponse
from cookieseal.security.cookies import (
    clear_session_cookie,
    set_session_cookie,
    verify_session_cookie,
)
from cookieseal.security.session_tokens import SessionTokenCodec

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])


def get_codec(request: Request) -> SessionTokenCodec:
    return request.app.state.session_codec


async def require_session(request: Request) -> None:
    """FastAPI dependency that rejects requests without a valid session cookie.

    Usage::

        @router.get("/private", dependencies=[Depends(require_session)])
        async def private(): ...
    """
    if not verify_session_cookie(request, get_codec(request)):
        raise HTTPException(status_code=401, detail="Not authenticated")


@router.post("/auth/login", response_model=OkResponse)
async def cookie_login(request: Request):
    """Check the access password and set an HTTP-only session cookie."""
    try:
        body = await request.json()
        login = LoginRequest.model_validate(body)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid JSON body") from None

    settings = request.app.state.settings
    if settings.access_password is None:
        raise HTTPException(status_code=503, detail="Login is not configured")

    # JSON allows lone surrogates, which strict UTF-8 cannot encode
    expected = settings.access_password.get_secret_value().encode("utf-8", "surrogatepass")
    submitted = login.password.encode("utf-8", "surrogatepass")
    if not hmac.compare_digest(submitted, expected):
        logger.info("Rejected login attempt")
        raise HTTPException(status_code=401, detail="Invalid password")

    codec = get_codec(request)
    token = codec.generate()
    if token is None:
        raise HTTPException(status_code=500, detail="Could not create session")

    response = JSONResponse(content={"ok": True})
    set_session_cookie(response, token, clock=codec.clock)
    return response


@router.post("/auth/logout", response_model=OkResponse)
async def cookie_logout():
    """Clear the session cookie."""
    response = JSONResponse(content={"ok": True})
    clear_session_cookie(response)
    return response


@router.get("/auth/session", response_model=SessionStatusResponse)
async def session_status(request: Request):
    """Report whether the caller is logged in. Never 401s."""
    authenticated = verify_session_cookie(request, get_codec(request))
    return SessionStatusResponse(authenticated=authenticated)
