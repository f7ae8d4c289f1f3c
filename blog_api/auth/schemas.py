"""
Auth API schemas (request models).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from .security import MAX_PASSWORD_BYTES


class UserCredentials(BaseModel):
    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=4, max_length=100)


class RegisterRequest(UserCredentials):
    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only looks at the first 72 bytes and newer releases refuse longer input.
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes in UTF-8.")
        return value
