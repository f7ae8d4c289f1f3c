"""
Post API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Path, Query, status

from blog_api.auth import dependencies as auth_dependencies
from blog_api.core import db

from . import schemas, service

router = APIRouter()


@router.post("/posts", status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: schemas.CreatePostRequest,
    username: str = Depends(auth_dependencies.get_current_username),
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    slug = await service.create_post(conn, payload, username=username)
    return {"slug": slug}


@router.get("/posts")
async def list_posts(
    category: str | None = Query(default=None, min_length=1, max_length=70),
    subcategories: str | None = Query(default=None, max_length=2000),
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> list[schemas.PostResponse]:
    """
    List posts, optionally filtered by category and/or any of the given subcategories.
    """
    return await service.list_posts(
        conn,
        category=category,
        subcategories=schemas.parse_subcategory_filter(subcategories),
    )


@router.delete("/posts/{slug}")
async def delete_post(
    slug: str = Path(..., min_length=1, max_length=100),
    username: str = Depends(auth_dependencies.get_current_username),
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    await service.delete_post(conn, slug, username=username)
    return {"ok": True}
