"""
Subcategory persistence (raw SQL).
"""

from __future__ import annotations

import asyncpg

from blog_api.core import db


async def insert_subcategory(
    conn: asyncpg.Connection,
    *,
    slug: str,
    name: str,
    category_slug: str,
    username: str,
) -> None:
    await db.execute(
        conn,
        """
        INSERT INTO subcategories (slug, name, category_slug, username)
        VALUES ($1, $2, $3, $4)
        """,
        slug,
        name,
        category_slug,
        username,
    )


async def insert_subcategories(
    conn: asyncpg.Connection,
    items: list[tuple[str, str]],
    *,
    category_slug: str,
    username: str,
) -> None:
    """
    Bulk insert (slug, name) pairs under one category, skipping existing slugs.
    """
    if not items:
        return

    records = [(slug, name, category_slug, username) for (slug, name) in items]
    await conn.executemany(
        """
        INSERT INTO subcategories (slug, name, category_slug, username)
        VALUES ($1, $2, $3, $4)
        ON CONFLICT (slug) DO NOTHING
        """,
        records,
    )


async def get_parent_categories(conn: asyncpg.Connection, slugs: list[str]) -> dict[str, str]:
    """
    Map each existing subcategory slug to its category slug.
    """
    if not slugs:
        return {}
    rows = await db.fetch_all(
        conn,
        """
        SELECT slug, category_slug
        FROM subcategories
        WHERE slug = ANY($1::varchar[])
        """,
        slugs,
    )
    return {str(row["slug"]): str(row["category_slug"]) for row in rows}


async def list_subcategories(conn: asyncpg.Connection) -> list[dict]:
    return await db.fetch_all(
        conn,
        """
        SELECT slug, name, category_slug
        FROM subcategories
        ORDER BY name, slug
        """,
    )


async def get_subcategory_owner(conn: asyncpg.Connection, slug: str) -> str | None:
    row = await db.fetch_one(
        conn,
        """
        SELECT username
        FROM subcategories
        WHERE slug = $1
        FOR UPDATE
        """,
        slug,
    )
    if row is None:
        return None
    return str(row["username"])


async def delete_post_links(conn: asyncpg.Connection, slug: str) -> int:
    return await db.execute(
        conn,
        """
        DELETE FROM posts_subcategories
        WHERE subcategory_slug = $1
        """,
        slug,
    )


async def delete_subcategory(conn: asyncpg.Connection, slug: str) -> int:
    return await db.execute(
        conn,
        """
        DELETE FROM subcategories
        WHERE slug = $1
        """,
        slug,
    )
