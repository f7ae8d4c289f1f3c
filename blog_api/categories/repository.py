"""
Category persistence (raw SQL).
"""

from __future__ import annotations

import asyncpg

from blog_api.core import db


async def insert_category(conn: asyncpg.Connection, *, slug: str, name: str, username: str) -> None:
    await db.execute(
        conn,
        """
        INSERT INTO categories (slug, name, username)
        VALUES ($1, $2, $3)
        """,
        slug,
        name,
        username,
    )


async def upsert_category(conn: asyncpg.Connection, *, slug: str, name: str, username: str) -> bool:
    """
    Insert a category unless one with the slug exists.

    Returns True when a row was created. An existing row keeps its owner.
    """
    created = await db.execute(
        conn,
        """
        INSERT INTO categories (slug, name, username)
        VALUES ($1, $2, $3)
        ON CONFLICT (slug) DO NOTHING
        """,
        slug,
        name,
        username,
    )
    return created > 0


async def list_categories(conn: asyncpg.Connection) -> list[dict]:
    return await db.fetch_all(
        conn,
        """
        SELECT slug, name
        FROM categories
        ORDER BY name, slug
        """,
    )


async def get_category_owner(conn: asyncpg.Connection, slug: str) -> str | None:
    """
    Owner of a category, locking the row for the rest of the transaction.
    """
    row = await db.fetch_one(
        conn,
        """
        SELECT username
        FROM categories
        WHERE slug = $1
        FOR UPDATE
        """,
        slug,
    )
    if row is None:
        return None
    return str(row["username"])


async def detach_posts(conn: asyncpg.Connection, slug: str) -> int:
    return await db.execute(
        conn,
        """
        UPDATE posts
        SET category_slug = NULL
        WHERE category_slug = $1
        """,
        slug,
    )


async def delete_subcategory_links(conn: asyncpg.Connection, slug: str) -> int:
    """
    Delete post links of every subcategory under the category.
    """
    return await db.execute(
        conn,
        """
        DELETE FROM posts_subcategories
        WHERE subcategory_slug IN (
          SELECT slug
          FROM subcategories
          WHERE category_slug = $1
        )
        """,
        slug,
    )


async def delete_subcategories(conn: asyncpg.Connection, slug: str) -> int:
    return await db.execute(
        conn,
        """
        DELETE FROM subcategories
        WHERE category_slug = $1
        """,
        slug,
    )


async def delete_category(conn: asyncpg.Connection, slug: str) -> int:
    return await db.execute(
        conn,
        """
        DELETE FROM categories
        WHERE slug = $1
        """,
        slug,
    )
