"""
Subcategory API endpoints.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Path, status

from blog_api.auth import dependencies as auth_dependencies
from blog_api.core import db

from . import schemas, service

router = APIRouter()


@router.post("/sub-categories", status_code=status.HTTP_201_CREATED)
async def create_subcategory(
    payload: schemas.CreateSubcategoryRequest,
    username: str = Depends(auth_dependencies.get_current_username),
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    slug = await service.create_subcategory(conn, payload, username=username)
    return {"slug": slug}


@router.get("/sub-categories")
async def list_subcategories(
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> list[schemas.SubcategoryResponse]:
    return await service.list_subcategories(conn)


@router.delete("/sub-categories/{slug}")
async def delete_subcategory(
    slug: str = Path(..., min_length=1, max_length=100),
    username: str = Depends(auth_dependencies.get_current_username),
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    await service.delete_subcategory(conn, slug, username=username)
    return {"ok": True}
