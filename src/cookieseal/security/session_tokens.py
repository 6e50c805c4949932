"""HMAC-signed stateless session tokens.

Token format: ``{b64url(payload_json)}.{b64url(hmac_sha256)}``

The payload is the compact JSON object ``{"exp": <unix seconds>}``. The HMAC
is computed over the ASCII bytes of the *encoded* payload segment, so the
signature can be checked before anything is decoded or parsed. No server-side
session store is involved: a token stays valid until ``exp`` passes or the
secret key changes.
"""

import base64
import hashlib
import hmac
import logging
import re
import time
from collections.abc import Callable
from enum import Enum

from pydantic import BaseModel, StrictInt

__all__ = [
    "SESSION_COOKIE_NAME",
    "SESSION_DURATION_SECONDS",
    "Clock",
    "SessionPayload",
    "SessionTokenCodec",
    "b64url_decode",
    "b64url_encode",
]

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "__session"
SESSION_DURATION_SECONDS = 60 * 60  # 1 hour

Clock = Callable[[], float]

_B64URL_RE = re.compile(r"[A-Za-z0-9_-]+")


def b64url_encode(data: bytes) -> str:
    """Base64url-encode *data* with the ``=`` padding stripped."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded base64url text.

    Raises ``ValueError`` for characters outside the URL-safe alphabet or an
    impossible length.
    """
    if not _B64URL_RE.fullmatch(text):
        raise ValueError("not base64url")
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


class SessionPayload(BaseModel):
    """Signed token body. ``exp`` is an absolute expiry in Unix seconds."""

    exp: StrictInt


class TokenStatus(str, Enum):
    VALID = "valid"
    MALFORMED = "malformed"  # empty, wrong shape, or bad base64
    BAD_SIGNATURE = "bad_signature"
    BAD_PAYLOAD = "bad_payload"  # signed, but not a usable payload
    EXPIRED = "expired"


class SessionTokenCodec:
    """Issues and verifies session tokens for one secret key.

    Parameters
    ----------
    secret_key : bytes | str
        HMAC key. ``str`` keys are UTF-8 encoded.
    clock : Callable[[], float]
        Source of the current Unix time, ``time.time`` by default.
    """

    def __init__(
        self,
        secret_key: bytes | str,
        clock: Clock = time.time,
    ):
        if isinstance(secret_key, str):
            secret_key = secret_key.encode("utf-8")
        if not secret_key:
            raise ValueError("Session secret key must not be empty")
        self._secret_key = secret_key
        self.clock = clock

    def now(self) -> int:
        """Current time in whole seconds."""
        return int(self.clock())

    def generate(self) -> str | None:
        """Issue a token expiring one session length from now.

        Returns ``None`` if the token could not be built; callers treat that
        as a failed login.
        """
        try:
            payload = SessionPayload(exp=self.now() + SESSION_DURATION_SECONDS)
            encoded_payload = b64url_encode(payload.model_dump_json().encode("utf-8"))
            encoded_signature = b64url_encode(self._sign(encoded_payload))
        except Exception:
            logger.exception("Error generating session token")
            return None
        return f"{encoded_payload}.{encoded_signature}"

    def verify(self, token: str | None) -> bool:
        """Return True only for a well-formed, correctly signed, unexpired token."""
        return self._check(token) is TokenStatus.VALID

    def _check(self, token) -> TokenStatus:
        if not token or not isinstance(token, str):
            return TokenStatus.MALFORMED

        parts = token.split(".")
        if len(parts) != 2 or not all(parts):
            logger.debug("Session token rejected: wrong number of segments")
            return TokenStatus.MALFORMED

        encoded_payload, encoded_signature = parts
        try:
            signature = b64url_decode(encoded_signature)
            expected = self._sign(encoded_payload)
        except ValueError:
            logger.debug("Session token rejected: undecodable segment")
            return TokenStatus.MALFORMED

        # compare_digest treats unequal lengths as a mismatch
        if not hmac.compare_digest(signature, expected):
            logger.warning("Session token signature mismatch")
            return TokenStatus.BAD_SIGNATURE

        try:
            payload = SessionPayload.model_validate_json(b64url_decode(encoded_payload))
        except ValueError:
            logger.debug("Session token rejected: unparseable payload")
            return TokenStatus.BAD_PAYLOAD

        if payload.exp <= self.now():
            logger.info("Session token expired")
            return TokenStatus.EXPIRED

        return TokenStatus.VALID

    def _sign(self, encoded_payload: str) -> bytes:
        return hmac.new(
            self._secret_key, encoded_payload.encode("ascii"), hashlib.sha256
        ).digest()
