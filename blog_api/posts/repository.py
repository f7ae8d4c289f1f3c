"""
Post persistence (raw SQL).
"""

from __future__ import annotations

import json
from typing import Any

import asyncpg

from blog_api.core import db


def _json_value(value: Any) -> Any:
    """
    asyncpg hands json columns back as text; decode them here.
    """
    if isinstance(value, str):
        return json.loads(value)
    return value


async def insert_post(
    conn: asyncpg.Connection,
    *,
    slug: str,
    title: str,
    body: str,
    username: str,
    category_slug: str | None,
) -> None:
    await db.execute(
        conn,
        """
        INSERT INTO posts (slug, title, body, username, category_slug)
        VALUES ($1, $2, $3, $4, $5)
        """,
        slug,
        title,
        body,
        username,
        category_slug,
    )


async def link_subcategories(
    conn: asyncpg.Connection,
    *,
    post_slug: str,
    subcategory_slugs: list[str],
) -> None:
    """
    Link a post to subcategories. Existing links are left as they are.
    """
    if not subcategory_slugs:
        return

    records = [(post_slug, subcategory_slug) for subcategory_slug in subcategory_slugs]
    await conn.executemany(
        """
        INSERT INTO posts_subcategories (post_slug, subcategory_slug)
        VALUES ($1, $2)
        ON CONFLICT DO NOTHING
        """,
        records,
    )


async def get_post_owner(conn: asyncpg.Connection, slug: str) -> str | None:
    row = await db.fetch_one(
        conn,
        """
        SELECT username
        FROM posts
        WHERE slug = $1
        FOR UPDATE
        """,
        slug,
    )
    if row is None:
        return None
    return str(row["username"])


async def delete_subcategory_links(conn: asyncpg.Connection, slug: str) -> int:
    return await db.execute(
        conn,
        """
        DELETE FROM posts_subcategories
        WHERE post_slug = $1
        """,
        slug,
    )


async def delete_post(conn: asyncpg.Connection, slug: str) -> int:
    return await db.execute(
        conn,
        """
        DELETE FROM posts
        WHERE slug = $1
        """,
        slug,
    )


def build_list_posts_query(
    *,
    category_slug: str | None = None,
    subcategory_slugs: list[str] | None = None,
) -> tuple[str, list[Any]]:
    """
    Build the post listing query and its arguments.

    Without a subcategory filter the aggregated subcategories are LEFT JOINed,
    so posts without links are kept. With a filter the aggregation only sees
    matching subcategories and is INNER JOINed: a post survives when it has at
    least one of them, and appears once because links are grouped per post.
    """
    args: list[Any] = []

    subcategory_filter = ""
    if subcategory_slugs:
        args.append(subcategory_slugs)
        subcategory_filter = f"WHERE s.slug = ANY(${len(args)}::varchar[])"

    category_filter = ""
    if category_slug:
        args.append(category_slug)
        category_filter = f"WHERE c.slug = ${len(args)}"

    join_kind = "INNER" if subcategory_filter else "LEFT"

    sql = f"""
        SELECT
          p.slug,
          p.title,
          p.body,
          p.created_at,
          p.username,
          CASE
            WHEN c.slug IS NULL THEN NULL
            ELSE json_build_object('slug', c.slug, 'name', c.name)
          END AS category,
          COALESCE(sub_c.items, '[]'::json) AS subcategories
        FROM posts p
        LEFT JOIN categories c ON c.slug = p.category_slug
        {join_kind} JOIN (
          SELECT
            ps.post_slug,
            json_agg(
              json_build_object('slug', s.slug, 'name', s.name, 'category', s.category_slug)
              ORDER BY s.name, s.slug
            ) AS items
          FROM posts_subcategories ps
          JOIN subcategories s ON s.slug = ps.subcategory_slug
          {subcategory_filter}
          GROUP BY ps.post_slug
        ) sub_c ON sub_c.post_slug = p.slug
        {category_filter}
        ORDER BY p.created_at DESC, p.slug
        """
    return sql, args


async def list_posts(
    conn: asyncpg.Connection,
    *,
    category_slug: str | None = None,
    subcategory_slugs: list[str] | None = None,
) -> list[dict[str, Any]]:
    sql, args = build_list_posts_query(
        category_slug=category_slug,
        subcategory_slugs=subcategory_slugs,
    )
    rows = await db.fetch_all(conn, sql, *args)
    for row in rows:
        row["category"] = _json_value(row["category"])
        row["subcategories"] = _json_value(row["subcategories"]) or []
    return rows
