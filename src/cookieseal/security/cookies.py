"""Session cookie lifecycle: read, set, clear, verify.

Every cookie written here carries the same fixed attribute set. Browsers only
delete a cookie when the clearing ``Set-Cookie`` repeats the attributes it was
set with, so ``clear_session_cookie`` must never drift from
``set_session_cookie``.
"""

import logging
import time
from datetime import UTC, datetime

from cookieseal.security.protocol import CookieSink, CookieSource
from cookieseal.security.session_tokens import (
    SESSION_COOKIE_NAME,
    SESSION_DURATION_SECONDS,
    Clock,
    SessionTokenCodec,
)

__all__ = [
    "COOKIE_ATTRIBUTES",
    "clear_session_cookie",
    "get_session_token",
    "set_session_cookie",
    "verify_session_cookie",
]

logger = logging.getLogger(__name__)

# SameSite=None lets the cookie through when the app is embedded in a
# third-party frame; browsers require Secure alongside it.
COOKIE_ATTRIBUTES = {
    "path": "/",
    "httponly": True,
    "secure": True,
    "samesite": "None",
}

_EPOCH = datetime.fromtimestamp(0, tz=UTC)


def get_session_token(request: CookieSource) -> str | None:
    """Return the raw session cookie value, or None when absent."""
    return request.cookies.get(SESSION_COOKIE_NAME) or None


def set_session_cookie(response: CookieSink, token: str, clock: Clock = time.time) -> None:
    """Attach *token* as the session cookie, expiring one session length from now."""
    expires = datetime.fromtimestamp(int(clock()) + SESSION_DURATION_SECONDS, tz=UTC)
    response.set_cookie(SESSION_COOKIE_NAME, token, expires=expires, **COOKIE_ATTRIBUTES)


def clear_session_cookie(response: CookieSink) -> None:
    """Overwrite the session cookie with an empty value that expired at the epoch."""
    response.set_cookie(SESSION_COOKIE_NAME, "", expires=_EPOCH, **COOKIE_ATTRIBUTES)


def verify_session_cookie(request: CookieSource, codec: SessionTokenCodec) -> bool:
    """True when the request carries a valid session cookie."""
    token = get_session_token(request)
    if not token:
        logger.debug("No session cookie on request")
        return False
    return codec.verify(token)
