"""
Auth business logic.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import HTTPException, status

from . import repository, schemas, security

logger = logging.getLogger(__name__)

# Granted on registration; write access is handed out by an operator.
DEFAULT_PERMISSIONS = ["cars:read", "motorbikes:read"]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _to_user_response(user_row: dict, permissions: list[str]) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=int(user_row["id"]),
        email=str(user_row["email"]),
        is_active=bool(user_row["is_active"]),
        created_at=user_row["created_at"],
        permissions=permissions,
    )


async def _issue_token_pair(user_row: dict) -> schemas.TokenPairResponse:
    raw_refresh_token = security.build_refresh_token()
    await repository.insert_refresh_token(
        user_id=int(user_row["id"]),
        token_hash=security.hash_refresh_token(raw_refresh_token),
        expires_at=_utc_now() + security.refresh_token_ttl(),
    )
    return schemas.TokenPairResponse(
        access_token=security.build_access_token(user_id=int(user_row["id"]), email=str(user_row["email"])),
        refresh_token=raw_refresh_token,
    )


async def register(payload: schemas.RegisterRequest) -> schemas.AuthResponse:
    existing = await repository.get_user_by_email(payload.email)
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered.",
        )

    try:
        user_row = await repository.create_user(
            email=payload.email,
            password_hash=security.hash_password(payload.password),
            permissions=DEFAULT_PERMISSIONS,
        )
    except repository.DuplicateEmail as exc:
        # Lost a race with a concurrent registration for the same email.
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Email is already registered.",
        ) from exc
    logger.info("user_registered id=%s", user_row["id"])

    tokens = await _issue_token_pair(user_row)
    return schemas.AuthResponse(user=_to_user_response(user_row, list(DEFAULT_PERMISSIONS)), tokens=tokens)


async def login(payload: schemas.LoginRequest) -> schemas.AuthResponse:
    user_row = await repository.get_user_by_email(payload.email)
    if user_row is None or not security.verify_password(payload.password, str(user_row.get("password_hash") or "")):
        raise _unauthorized("Invalid email or password.")

    if not bool(user_row.get("is_active", False)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive.",
        )

    tokens = await _issue_token_pair(user_row)
    permissions = await repository.get_permissions_for_user(int(user_row["id"]))
    return schemas.AuthResponse(user=_to_user_response(user_row, permissions), tokens=tokens)


async def refresh_tokens(payload: schemas.RefreshRequest) -> schemas.TokenPairResponse:
    old_token_row = await repository.get_refresh_token_by_hash(security.hash_refresh_token(payload.refresh_token.strip()))
    if old_token_row is None:
        raise _unauthorized("Invalid refresh token.")

    if old_token_row.get("revoked_at") is not None:
        raise _unauthorized("Refresh token is revoked.")

    expires_at = old_token_row.get("expires_at")
    if not isinstance(expires_at, datetime) or expires_at <= _utc_now():
        raise _unauthorized("Refresh token is expired.")

    user_row = await repository.get_user_by_id(int(old_token_row["user_id"]))
    if user_row is None or not bool(user_row.get("is_active", False)):
        raise _unauthorized("Invalid refresh token owner.")

    raw_refresh_token = security.build_refresh_token()
    try:
        await repository.rotate_refresh_token(
            old_token_id=int(old_token_row["id"]),
            user_id=int(user_row["id"]),
            token_hash=security.hash_refresh_token(raw_refresh_token),
            expires_at=_utc_now() + security.refresh_token_ttl(),
        )
    except repository.RefreshTokenReused as exc:
        logger.warning("refresh_token_reused token_id=%s", old_token_row["id"])
        raise _unauthorized("Refresh token is revoked.") from exc
    return schemas.TokenPairResponse(
        access_token=security.build_access_token(user_id=int(user_row["id"]), email=str(user_row["email"])),
        refresh_token=raw_refresh_token,
    )


async def logout(payload: schemas.LogoutRequest, *, current_user_id: int) -> dict[str, bool]:
    if payload.refresh_token:
        await repository.revoke_refresh_token_by_hash(
            security.hash_refresh_token(payload.refresh_token),
            user_id=current_user_id,
        )
    else:
        await repository.revoke_all_refresh_tokens_for_user(current_user_id)
    return {"ok": True}


async def get_user_from_access_token(access_token: str) -> dict:
    try:
        claims = security.decode_access_token(access_token)
    except security.AuthSecurityError as exc:
        raise _unauthorized(str(exc)) from exc

    subject = str(claims.get("sub") or "").strip()
    if not subject.isdigit():
        raise _unauthorized("Invalid access token subject.")

    user_row = await repository.get_user_by_id(int(subject))
    if user_row is None:
        raise _unauthorized("User not found.")
    if not bool(user_row.get("is_active", False)):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User is inactive.",
        )
    return user_row


async def me(user_row: dict) -> schemas.UserResponse:
    permissions = await repository.get_permissions_for_user(int(user_row["id"]))
    return _to_user_response(user_row, permissions)
