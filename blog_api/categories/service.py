"""
Category business logic.

Deleting a category is a soft cascade:
1) posts in the category lose their category (they are not deleted)
2) post links of its subcategories are removed
3) its subcategories are removed
4) the category row is removed
All four steps share one transaction.
"""

from __future__ import annotations

import logging

import asyncpg

from blog_api.core import errors, slugs

from . import repository, schemas

logger = logging.getLogger(__name__)


async def create_category(
    conn: asyncpg.Connection,
    payload: schemas.CreateCategoryRequest,
    *,
    username: str,
) -> str:
    name = payload.name.strip()
    slug = slugs.make_slug(name)
    try:
        await repository.insert_category(conn, slug=slug, name=name, username=username)
    except asyncpg.UniqueViolationError as exc:
        raise errors.Conflict("A category with the same name already exists.") from exc

    logger.info("category_created slug=%s username=%s", slug, username)
    return slug


async def list_categories(conn: asyncpg.Connection) -> list[schemas.CategoryResponse]:
    rows = await repository.list_categories(conn)
    return [schemas.CategoryResponse(slug=str(row["slug"]), name=str(row["name"])) for row in rows]


async def delete_category(conn: asyncpg.Connection, slug: str, *, username: str) -> None:
    async with conn.transaction():
        owner = await repository.get_category_owner(conn, slug)
        if owner is None:
            raise errors.NotFound("Category not found.")
        if owner != username:
            raise errors.Forbidden("You can only delete your own categories.")

        detached = await repository.detach_posts(conn, slug)
        unlinked = await repository.delete_subcategory_links(conn, slug)
        removed_subcategories = await repository.delete_subcategories(conn, slug)
        await repository.delete_category(conn, slug)

    logger.info(
        "category_deleted slug=%s username=%s detached_posts=%s unlinked=%s subcategories=%s",
        slug,
        username,
        detached,
        unlinked,
        removed_subcategories,
    )
