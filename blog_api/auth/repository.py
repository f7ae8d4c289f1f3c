"""
Auth persistence helpers.
"""

from __future__ import annotations

import asyncpg

from blog_api.core import db


async def create_user(conn: asyncpg.Connection, *, username: str, password_hash: str) -> str:
    row = await db.fetch_one(
        conn,
        """
        INSERT INTO users (username, password)
        VALUES ($1, $2)
        RETURNING username
        """,
        username,
        password_hash,
    )
    if row is None:
        raise RuntimeError("Failed to create user.")
    return str(row["username"])


async def get_password_hash(conn: asyncpg.Connection, username: str) -> str | None:
    row = await db.fetch_one(
        conn,
        """
        SELECT password
        FROM users
        WHERE username = $1
        LIMIT 1
        """,
        username,
    )
    if row is None:
        return None
    return str(row["password"])
