# Auth schemas.

from __future__ import annotations

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Cookie-based login request."""

    password: str = Field(..., description="Shared access password")


class OkResponse(BaseModel):
    ok: bool = True


class SessionStatusResponse(BaseModel):
    """Whether the request carries a valid session cookie."""

    authenticated: bool
