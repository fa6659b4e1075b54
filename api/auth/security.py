"""
Credential primitives for the auth package.

- passwords are stored as bcrypt hashes
- access tokens are short-lived HS256 JWTs whose `sub` is the user id
- refresh tokens are opaque random strings; only their SHA-256 is persisted
"""

from __future__ import annotations

import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from core import settings

ACCESS_TOKEN_TYPE = "access"


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Override JWT_SECRET outside of development.
    return settings.env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return settings.env_str("JWT_ALG", "HS256")


def access_token_ttl() -> timedelta:
    return timedelta(minutes=settings.env_int("ACCESS_TOKEN_EXPIRE_MIN", 15))


def refresh_token_ttl() -> timedelta:
    return timedelta(days=settings.env_int("REFRESH_TOKEN_EXPIRE_DAYS", 30))


def hash_password(plain_password: str) -> str:
    if not plain_password:
        raise AuthSecurityError("Password is empty.")
    return bcrypt.hashpw(plain_password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    if not plain_password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash.
        return False


def build_access_token(*, user_id: int, email: str) -> str:
    issued_at = datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "email": email,
        "type": ACCESS_TOKEN_TYPE,
        "iat": issued_at,
        "exp": issued_at + access_token_ttl(),
    }
    return jwt.encode(claims, jwt_secret(), algorithm=jwt_algorithm())


def decode_access_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Access token is empty.")

    try:
        claims = jwt.decode(raw, jwt_secret(), algorithms=[jwt_algorithm()])
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Access token has expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid access token.") from exc

    if str(claims.get("type") or "").lower() != ACCESS_TOKEN_TYPE:
        raise AuthSecurityError("Token is not an access token.")
    return claims


def build_refresh_token() -> str:
    return secrets.token_urlsafe(48)


def hash_refresh_token(raw_refresh_token: str) -> str:
    if not raw_refresh_token:
        raise AuthSecurityError("Refresh token is empty.")
    return hashlib.sha256(raw_refresh_token.encode("utf-8")).hexdigest()
