"""
Auth dependencies for protected FastAPI routes.

Public routes do not declare `get_current_username`; everything that does
requires a valid `token` cookie.
"""

from __future__ import annotations

import logging

from fastapi import Cookie, Request, Response

from blog_api.core import errors

from . import security, service

logger = logging.getLogger(__name__)


async def get_current_username(
    request: Request,
    response: Response,
    token: str | None = Cookie(default=None),
) -> str:
    if not token:
        raise errors.Unauthorized("Missing session token.")

    try:
        payload = security.decode_token(token)
    except security.AuthSecurityError as exc:
        raise errors.Unauthorized(str(exc)) from exc

    username = str(payload["username"])

    # Sliding session: extend tokens that are close to expiring.
    fresh_token = security.refresh_if_near_expiry(payload)
    if fresh_token is not None:
        service.set_session_cookie(response, fresh_token)
        service.remember_refreshed_session(request, fresh_token)
        logger.debug("session_refreshed username=%s", username)

    return username
