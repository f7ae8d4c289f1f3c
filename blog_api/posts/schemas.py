"""
Pydantic schemas and query parsing for post endpoints.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field

from blog_api.core import errors

MAX_FILTER_LENGTH = 70

SubcategoryName = Annotated[str, Field(min_length=3, max_length=70)]


class CreatePostRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=70)
    body: str = Field(..., min_length=1, max_length=500)
    category: str | None = Field(default=None, min_length=3, max_length=70)
    subcategories: list[SubcategoryName] | None = None


class CategoryRef(BaseModel):
    slug: str
    name: str


class SubcategoryRef(BaseModel):
    slug: str
    name: str
    category: str


class PostResponse(BaseModel):
    slug: str
    title: str
    body: str
    username: str
    created_at: datetime
    category: CategoryRef | None = None
    subcategories: list[SubcategoryRef] = Field(default_factory=list)


def parse_subcategory_filter(raw: str | None) -> list[str]:
    """
    Split the `subcategories=a,b` query value.

    Empty segments are ignored; over-long ones are rejected.
    """
    if raw is None:
        return []
    items = [item.strip() for item in raw.split(",") if item.strip()]
    for item in items:
        if len(item) > MAX_FILTER_LENGTH:
            raise errors.ValidationError(
                f"Subcategory filter values must be at most {MAX_FILTER_LENGTH} characters."
            )
    return items
