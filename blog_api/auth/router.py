"""
Auth API endpoints: register, sign in, log out.
"""

from __future__ import annotations

import asyncpg
from fastapi import APIRouter, Depends, Response, status

from blog_api.core import db

from . import dependencies, schemas, service

router = APIRouter()


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    payload: schemas.RegisterRequest,
    response: Response,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    username = await service.register(conn, payload)
    service.start_session(response, username)
    return {"ok": True}


@router.post("/sign")
async def sign_in(
    payload: schemas.UserCredentials,
    response: Response,
    conn: asyncpg.Connection = Depends(db.get_connection),
) -> dict:
    await service.authenticate(conn, payload)
    service.start_session(response, payload.username)
    return {"ok": True}


@router.get("/logout")
async def log_out(
    response: Response,
    _: str = Depends(dependencies.get_current_username),
) -> dict:
    service.end_session(response)
    return {"ok": True}
