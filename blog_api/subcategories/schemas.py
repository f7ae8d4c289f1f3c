"""
Pydantic schemas for subcategory endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateSubcategoryRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=70)
    # Display name of the parent category; created if it does not exist.
    category: str = Field(..., min_length=1, max_length=70)


class SubcategoryResponse(BaseModel):
    slug: str
    name: str
    category: str
