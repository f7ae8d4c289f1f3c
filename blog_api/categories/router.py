"""
Category API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Path, status

from blog_api.auth import dependencies as auth_dependencies
from blog_api.core import db

from . import schemas, service

router = APIRouter()


@router.post("/categories", status_code=status.HTTP_201_CREATED)
async def create_category(
    payload: schemas.CreateCategoryRequest,
    username: str = Depends(auth_dependencies.get_current_username),
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    slug = await service.create_category(conn, payload, username=username)
    return {"slug": slug}


@router.get("/categories")
async def list_categories(
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> list[schemas.CategoryResponse]:
    return await service.list_categories(conn)


@router.delete("/categories/{slug}")
async def delete_category(
    slug: str = Path(..., min_length=1, max_length=100),
    username: str = Depends(auth_dependencies.get_current_username),
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    await service.delete_category(conn, slug, username=username)
    return {"ok": True}
