"""
Post business logic.

Creating a post may also create its category and subcategories:
1) the category (if given) is inserted unless it already exists
2) the post row is inserted
3) unknown subcategories are created under the given category
4) the post is linked to every named subcategory
Everything runs in one transaction, so a failure leaves no rows behind.
"""

from __future__ import annotations

import logging

import asyncpg

from blog_api.categories import repository as category_repository
from blog_api.core import errors, slugs
from blog_api.subcategories import repository as subcategory_repository

from . import repository, schemas

logger = logging.getLogger(__name__)


async def _create_post_rows(
    conn: asyncpg.Connection,
    *,
    slug: str,
    title: str,
    body: str,
    username: str,
    category: tuple[str, str] | None,
    subcategories: list[tuple[str, str]],
) -> list[str]:
    category_slug = category[0] if category else None

    if category is not None:
        await category_repository.upsert_category(
            conn,
            slug=category[0],
            name=category[1],
            username=username,
        )

    await repository.insert_post(
        conn,
        slug=slug,
        title=title,
        body=body,
        username=username,
        category_slug=category_slug,
    )

    if not subcategories:
        return []

    subcategory_slugs = [sub_slug for (sub_slug, _) in subcategories]
    existing = await subcategory_repository.get_parent_categories(conn, subcategory_slugs)
    missing = [(sub_slug, name) for (sub_slug, name) in subcategories if sub_slug not in existing]

    if missing:
        if category_slug is None:
            raise errors.Conflict("Specify a category to create a new subcategory.")
        await subcategory_repository.insert_subcategories(
            conn,
            missing,
            category_slug=category_slug,
            username=username,
        )

    await repository.link_subcategories(conn, post_slug=slug, subcategory_slugs=subcategory_slugs)
    return [sub_slug for (sub_slug, _) in missing]


async def create_post(
    conn: asyncpg.Connection,
    payload: schemas.CreatePostRequest,
    *,
    username: str,
) -> str:
    title = payload.title.strip()
    body = payload.body.strip()
    if not body:
        raise errors.ValidationError("Post body is empty.")
    slug = slugs.make_slug(title)

    category = None
    if payload.category is not None:
        category_name = payload.category.strip()
        category = (slugs.make_slug(category_name), category_name)

    subcategories = slugs.unique_slugs(payload.subcategories or [])

    try:
        async with conn.transaction():
            created_subcategories = await _create_post_rows(
                conn,
                slug=slug,
                title=title,
                body=body,
                username=username,
                category=category,
                subcategories=subcategories,
            )
    except asyncpg.UniqueViolationError as exc:
        raise errors.Conflict("A post with the same title already exists.") from exc

    logger.info(
        "post_created slug=%s username=%s category=%s subcategories=%s new_subcategories=%s",
        slug,
        username,
        category[0] if category else None,
        len(subcategories),
        len(created_subcategories),
    )
    return slug


async def list_posts(
    conn: asyncpg.Connection,
    *,
    category: str | None = None,
    subcategories: list[str] | None = None,
) -> list[schemas.PostResponse]:
    category_slug = slugs.make_slug(category) if category else None
    subcategory_slugs = [slug for (slug, _) in slugs.unique_slugs(subcategories or [])]

    rows = await repository.list_posts(
        conn,
        category_slug=category_slug,
        subcategory_slugs=subcategory_slugs or None,
    )
    return [schemas.PostResponse.model_validate(row) for row in rows]


async def delete_post(conn: asyncpg.Connection, slug: str, *, username: str) -> None:
    async with conn.transaction():
        owner = await repository.get_post_owner(conn, slug)
        if owner is None:
            raise errors.NotFound("Post not found.")
        if owner != username:
            raise errors.Forbidden("You can only delete your own posts.")

        unlinked = await repository.delete_subcategory_links(conn, slug)
        await repository.delete_post(conn, slug)

    logger.info("post_deleted slug=%s username=%s unlinked=%s", slug, username, unlinked)
