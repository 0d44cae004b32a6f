"""
Password hashing and access token helpers.

Passwords are hashed with werkzeug's salted PBKDF2/scrypt helpers. Access
tokens are HS256 JWTs signed with the configured secret; every token is also
recorded as an ``AuthSession`` row so it can be revoked server side.
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash


class TokenError(Exception):
    """Raised when an access token cannot be decoded."""


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def create_access_token(
    claims: Dict[str, Any],
    *,
    secret: str,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(hours=24),
    now: Optional[datetime] = None,
) -> tuple[str, datetime]:
    """Sign a JWT carrying ``claims``.

    A random ``jti`` is added so two tokens issued in the same second for the
    same user never collide in the session table.

    Returns:
        The encoded token and its expiry as a naive UTC datetime.
    """
    issued_at = now or datetime.now(timezone.utc)
    expires_at = issued_at + expires_in
    payload = dict(claims)
    payload.update({"iat": issued_at, "exp": expires_at, "jti": secrets.token_hex(8)})
    token = jwt.encode(payload, secret, algorithm=algorithm)
    return token, expires_at.replace(tzinfo=None)


def decode_access_token(token: str, *, secret: str, algorithm: str = "HS256") -> Dict[str, Any]:
    """Decode and verify a JWT.

    Raises:
        TokenError: If the token is expired or otherwise invalid.
    """
    try:
        return jwt.decode(token, secret, algorithms=[algorithm])
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e
