"""Login request/response and the access token claims."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class LoginRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"example": {"email": "john@example.com", "password": "password123"}}
    )

    email: EmailStr
    password: str = Field(min_length=1)


class LoginResponse(BaseModel):
    """Bearer token issued to a user after a successful login."""

    token: str
    token_type: str = Field(default="bearer", frozen=True)
    email: str
    name: str


class TokenPayload(BaseModel):
    """Claims the API relies on when trusting an access token."""

    model_config = ConfigDict(extra="ignore")

    sub: str
    exp: datetime
    iat: datetime
    jti: str
    email: str | None = None


__all__ = ["LoginRequest", "LoginResponse", "TokenPayload"]
