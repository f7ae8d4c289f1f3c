"""
Subcategory business logic.
"""

from __future__ import annotations

import logging

import asyncpg

from blog_api.categories import repository as category_repository
from blog_api.core import errors, slugs

from . import repository, schemas

logger = logging.getLogger(__name__)


async def create_subcategory(
    conn: asyncpg.Connection,
    payload: schemas.CreateSubcategoryRequest,
    *,
    username: str,
) -> str:
    name = payload.name.strip()
    slug = slugs.make_slug(name)
    category_name = payload.category.strip()
    category_slug = slugs.make_slug(category_name)

    try:
        async with conn.transaction():
            # Unknown parent categories are created on the fly, owned by the caller.
            created = await category_repository.upsert_category(
                conn,
                slug=category_slug,
                name=category_name,
                username=username,
            )
            await repository.insert_subcategory(
                conn,
                slug=slug,
                name=name,
                category_slug=category_slug,
                username=username,
            )
    except asyncpg.UniqueViolationError as exc:
        raise errors.Conflict("A subcategory with the same name already exists.") from exc

    if created:
        logger.info("category_created slug=%s username=%s implicit=true", category_slug, username)
    logger.info("subcategory_created slug=%s category=%s username=%s", slug, category_slug, username)
    return slug


async def list_subcategories(conn: asyncpg.Connection) -> list[schemas.SubcategoryResponse]:
    rows = await repository.list_subcategories(conn)
    return [
        schemas.SubcategoryResponse(
            slug=str(row["slug"]),
            name=str(row["name"]),
            category=str(row["category_slug"]),
        )
        for row in rows
    ]


async def delete_subcategory(conn: asyncpg.Connection, slug: str, *, username: str) -> None:
    async with conn.transaction():
        owner = await repository.get_subcategory_owner(conn, slug)
        if owner is None:
            raise errors.NotFound("Subcategory not found.")
        if owner != username:
            raise errors.Forbidden("You can only delete your own subcategories.")

        unlinked = await repository.delete_post_links(conn, slug)
        await repository.delete_subcategory(conn, slug)

    logger.info("subcategory_deleted slug=%s username=%s unlinked=%s", slug, username, unlinked)
