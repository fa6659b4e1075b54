"""
Auth persistence: users, refresh tokens and permission grants.
"""

from __future__ import annotations

from datetime import datetime, timezone

import asyncpg

from core import db

_USER_COLUMNS = "id, email, password_hash, is_active, created_at, updated_at"

_TOKEN_COLUMNS = """
    id, user_id, token_hash, expires_at, revoked_at,
    replaced_by_token_id, created_at, last_used_at
"""


class DuplicateEmail(Exception):
    pass


class RefreshTokenReused(Exception):
    """
    The token being rotated was revoked by a concurrent request.
    """


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


async def create_user(*, email: str, password_hash: str, permissions: list[str]) -> dict:
    """
    Insert a user and grant its initial permission codes in one transaction.
    """
    async with db.pool().acquire() as conn:
        async with conn.transaction():
            try:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO users (email, password_hash, is_active)
                    VALUES ($1, $2, true)
                    RETURNING {_USER_COLUMNS}
                    """,
                    normalize_email(email),
                    password_hash,
                )
            except asyncpg.UniqueViolationError as exc:
                raise DuplicateEmail(normalize_email(email)) from exc
            if row is None:
                raise RuntimeError("Failed to create user.")

            await conn.execute(
                """
                INSERT INTO users_permissions (user_id, permission_id)
                SELECT $1, p.id
                FROM permissions p
                WHERE p.code = ANY($2::text[])
                ON CONFLICT DO NOTHING
                """,
                row["id"],
                permissions,
            )
            return dict(row)


async def get_user_by_email(email: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE email = $1
        """,
        normalize_email(email),
    )


async def get_user_by_id(user_id: int) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_USER_COLUMNS}
        FROM users
        WHERE id = $1
        """,
        user_id,
    )


async def get_permissions_for_user(user_id: int) -> list[str]:
    rows = await db.fetch_all(
        """
        SELECT p.code
        FROM permissions p
        JOIN users_permissions up ON up.permission_id = p.id
        WHERE up.user_id = $1
        ORDER BY p.code
        """,
        user_id,
    )
    return [str(row["code"]) for row in rows]


async def insert_refresh_token(*, user_id: int, token_hash: str, expires_at: datetime) -> dict:
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)

    row = await db.fetch_one(
        f"""
        INSERT INTO refresh_tokens (user_id, token_hash, expires_at)
        VALUES ($1, $2, $3)
        RETURNING {_TOKEN_COLUMNS}
        """,
        user_id,
        token_hash,
        expires_at,
    )
    if row is None:
        raise RuntimeError("Failed to insert refresh token.")
    return row


async def get_refresh_token_by_hash(token_hash: str) -> dict | None:
    return await db.fetch_one(
        f"""
        SELECT {_TOKEN_COLUMNS}
        FROM refresh_tokens
        WHERE token_hash = $1
        """,
        token_hash,
    )


async def rotate_refresh_token(*, old_token_id: int, user_id: int, token_hash: str, expires_at: datetime) -> dict:
    """
    Revoke `old_token_id` and insert its replacement atomically.

    Raises `RefreshTokenReused` (and rolls back the insert) when the old
    token is no longer live.
    """
    async with db.pool().acquire() as conn:
        async with conn.transaction():
            new_row = await conn.fetchrow(
                f"""
                INSERT INTO refresh_tokens (user_id, token_hash, expires_at)
                VALUES ($1, $2, $3)
                RETURNING {_TOKEN_COLUMNS}
                """,
                user_id,
                token_hash,
                expires_at,
            )
            if new_row is None:
                raise RuntimeError("Failed to insert refresh token.")

            revoked = await conn.fetchrow(
                """
                UPDATE refresh_tokens
                SET revoked_at = now(),
                    last_used_at = now(),
                    replaced_by_token_id = $2
                WHERE id = $1
                  AND revoked_at IS NULL
                RETURNING id
                """,
                old_token_id,
                new_row["id"],
            )
            if revoked is None:
                raise RefreshTokenReused(old_token_id)
            return dict(new_row)


async def revoke_refresh_token_by_hash(token_hash: str, *, user_id: int) -> bool:
    row = await db.fetch_one(
        """
        UPDATE refresh_tokens
        SET revoked_at = now()
        WHERE token_hash = $1
          AND user_id = $2
          AND revoked_at IS NULL
        RETURNING id
        """,
        token_hash,
        user_id,
    )
    return row is not None


async def revoke_all_refresh_tokens_for_user(user_id: int) -> None:
    await db.execute(
        """
        UPDATE refresh_tokens
        SET revoked_at = now()
        WHERE user_id = $1
          AND revoked_at IS NULL
        """,
        user_id,
    )
