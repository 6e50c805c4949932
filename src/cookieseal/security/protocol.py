"""What the session cookie helpers need from a web framework.

Starlette/FastAPI ``Request`` and ``Response`` satisfy both protocols
structurally; any other framework only needs a thin adapter.
"""

from collections.abc import Mapping
from datetime import datetime
from typing import Protocol, runtime_checkable


@runtime_checkable
class CookieSource(Protocol):
    """An inbound request with its cookies already parsed."""

    @property
    def cookies(self) -> Mapping[str, str]: ...


@runtime_checkable
class CookieSink(Protocol):
    """An outbound response that can set a named cookie."""

    def set_cookie(
        self,
        key: str,
        value: str = "",
        max_age: int | None = None,
        expires: datetime | str | int | None = None,
        path: str | None = "/",
        domain: str | None = None,
        secure: bool = False,
        httponly: bool = False,
        samesite: str | None = "lax",
    ) -> None: ...
