"""Password hashing and JWT access tokens."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

from jose import JWTError, jwt
from passlib.context import CryptContext

from .config import Settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass(slots=True)
class GeneratedToken:
    """A signed access token together with its expiry and identifier."""

    token: str
    expires_at: datetime
    jti: str


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(
    *,
    subject: str | int,
    settings: Settings,
    claims: dict[str, Any] | None = None,
    expires_delta: timedelta | None = None,
) -> GeneratedToken:
    """Sign an access token whose ``sub`` is ``subject``.

    ``claims`` are merged into the payload but can never override the
    registered ``sub``/``iat``/``exp``/``jti`` claims.
    """

    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    expire = now + expires_delta
    payload: dict[str, Any] = dict(claims or {})
    payload.update(
        {
            "sub": str(subject),
            "iat": now,
            "exp": expire,
            "jti": uuid4().hex,
        }
    )
    token = jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return GeneratedToken(token=token, expires_at=expire, jti=payload["jti"])


def decode_access_token(token: str, settings: Settings) -> dict[str, Any]:
    """Verify the signature and expiry of ``token`` and return its claims.

    Raises ``JWTError`` when the token cannot be trusted.
    """

    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


__all__ = [
    "GeneratedToken",
    "JWTError",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
