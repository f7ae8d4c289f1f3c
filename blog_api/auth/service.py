"""
Auth business logic.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import Request, Response
from starlette.concurrency import run_in_threadpool

from blog_api.core import errors

from . import repository, schemas, security

SESSION_COOKIE = "token"

logger = logging.getLogger(__name__)


async def register(conn: asyncpg.Connection, payload: schemas.UserCredentials) -> str:
    # bcrypt is CPU bound; keep it off the event loop.
    try:
        password_hash = await run_in_threadpool(security.hash_password, payload.password)
    except security.AuthSecurityError as exc:
        raise errors.ValidationError(str(exc)) from exc
    try:
        username = await repository.create_user(
            conn,
            username=payload.username,
            password_hash=password_hash,
        )
    except asyncpg.UniqueViolationError as exc:
        raise errors.Conflict("A user with the same name already exists.") from exc

    logger.info("user_registered username=%s", username)
    return username


async def authenticate(conn: asyncpg.Connection, payload: schemas.UserCredentials) -> None:
    password_hash = await repository.get_password_hash(conn, payload.username)
    if password_hash is None:
        raise errors.NotFound("User not found.")

    is_valid = await run_in_threadpool(security.verify_password, payload.password, password_hash)
    if not is_valid:
        logger.info("sign_in_rejected username=%s", payload.username)
        raise errors.Unauthorized("Incorrect password.")


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=security.session_life_time_s(),
        httponly=True,
        samesite="lax",
    )


def start_session(response: Response, username: str) -> None:
    set_session_cookie(response, security.issue_token(username))


def end_session(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE, httponly=True, samesite="lax")


def remember_refreshed_session(request: Request, token: str) -> None:
    request.state.refreshed_session_token = token


def restore_refreshed_session(request: Request, response: Response) -> None:
    """
    Put a token refreshed during this request back on an error response.

    Headers set on a dependency's `Response` only reach successful responses,
    so exception handlers call this to keep the extended session.
    """
    token = getattr(request.state, "refreshed_session_token", None)
    if token:
        set_session_cookie(response, token)
