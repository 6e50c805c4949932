"""Session token signing and cookie handling."""

from cookieseal.security.cookies import (
    COOKIE_ATTRIBUTES,
    clear_session_cookie,
    get_session_token,
    set_session_cookie,
    verify_session_cookie,
)
from cookieseal.security.session_tokens import (
    SESSION_COOKIE_NAME,
    SESSION_DURATION_SECONDS,
    SessionPayload,
    SessionTokenCodec,
)

__all__ = [
    "COOKIE_ATTRIBUTES",
    "SESSION_COOKIE_NAME",
    "SESSION_DURATION_SECONDS",
    "SessionPayload",
    "SessionTokenCodec",
    "clear_session_cookie",
    "get_session_token",
    "set_session_cookie",
    "verify_session_cookie",
]
