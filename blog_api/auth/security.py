"""
Auth security helpers: password hashing and session tokens.
"""

from __future__ import annotations

import time
from typing import Any

import bcrypt
import jwt

from blog_api.core.settings import env_int, env_str

DEFAULT_SESSION_LIFE_TIME_S = 7 * 24 * 60 * 60
DEFAULT_REFRESH_THRESHOLD_S = 24 * 60 * 60
MAX_PASSWORD_BYTES = 72


class AuthSecurityError(RuntimeError):
    pass


def jwt_secret() -> str:
    # Local default keeps development simple.
    # In production, set JWT_SECRET in environment.
    return env_str("JWT_SECRET", "dev-change-this-secret")


def jwt_algorithm() -> str:
    return env_str("JWT_ALG", "HS256")


def session_life_time_s() -> int:
    return env_int("SESSION_LIFE_TIME", DEFAULT_SESSION_LIFE_TIME_S)


def session_refresh_threshold_s() -> int:
    return env_int("SESSION_REFRESH_THRESHOLD", DEFAULT_REFRESH_THRESHOLD_S)


def password_rounds() -> int:
    # bcrypt only accepts a cost between 4 and 31.
    return max(4, min(env_int("PASS_CRYPTO_ROUNDS", 12), 31))


def now_epoch_s() -> int:
    return int(time.time())


def hash_password(plain_password: str) -> str:
    password = (plain_password or "").encode("utf-8")
    if not password:
        raise AuthSecurityError("Password is empty.")
    if len(password) > MAX_PASSWORD_BYTES:
        raise AuthSecurityError(f"Password is longer than {MAX_PASSWORD_BYTES} bytes.")
    return bcrypt.hashpw(password, bcrypt.gensalt(rounds=password_rounds())).decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    password = (plain_password or "").encode("utf-8")
    hashed = (password_hash or "").encode("utf-8")
    if not password or not hashed:
        return False
    try:
        return bcrypt.checkpw(password, hashed)
    except ValueError:
        return False


def issue_token(username: str, *, now: int | None = None) -> str:
    issued_at = now if now is not None else now_epoch_s()
    payload = {
        "username": username,
        "iat": issued_at,
        "exp": issued_at + session_life_time_s(),
    }
    return jwt.encode(payload, jwt_secret(), algorithm=jwt_algorithm())


def decode_token(token: str) -> dict[str, Any]:
    raw = (token or "").strip()
    if not raw:
        raise AuthSecurityError("Session token is empty.")

    try:
        payload = jwt.decode(
            raw,
            jwt_secret(),
            algorithms=[jwt_algorithm()],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise AuthSecurityError("Session token is expired.") from exc
    except jwt.InvalidTokenError as exc:
        raise AuthSecurityError("Invalid session token.") from exc

    username = payload.get("username")
    if not isinstance(username, str) or not username.strip():
        raise AuthSecurityError("Session token has no username.")

    return payload


def refresh_if_near_expiry(payload: dict[str, Any], *, now: int | None = None) -> str | None:
    """
    Re-issue a token for a verified payload whose expiry is inside the refresh window.

    Returns None while the token still has more than the threshold left.
    """
    current = now if now is not None else now_epoch_s()
    remaining = int(payload["exp"]) - current
    if remaining >= session_refresh_threshold_s():
        return None
    return issue_token(str(payload["username"]), now=current)
