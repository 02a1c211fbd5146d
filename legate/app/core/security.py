from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import jwt

from legate.app.core.config import settings

ALGORITHM = "HS256"


def create_access_token(subject: str, expires_delta: timedelta | None = None) -> str:
    """Mint a bearer token for *subject* (a user id).

    Tokens are normally issued by the auth provider sharing ``SECRET_KEY``;
    this is used by ops scripts and tests.
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta
        if expires_delta
        else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {"sub": subject, "exp": expire}
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> str | None:
    """Return the token subject, or None when the claim is missing.

    Raises ``jose.JWTError`` for malformed, tampered or expired tokens.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])
    return payload.get("sub")
