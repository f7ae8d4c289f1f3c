"""
Slug derivation.

Slugs double as primary keys, so the same trimmed name must always give the
same slug.
"""

from __future__ import annotations

from slugify import slugify

from . import errors

MAX_SLUG_LENGTH = 70


def make_slug(name: str) -> str:
    slug = slugify((name or "").strip(), max_length=MAX_SLUG_LENGTH)
    if not slug:
        raise errors.ValidationError(f"Cannot derive a slug from {name!r}.")
    return slug


def unique_slugs(names: list[str]) -> list[tuple[str, str]]:
    """
    Map names to (slug, trimmed_name) pairs, dropping repeated slugs.

    First occurrence wins and input order is kept.
    """
    seen: set[str] = set()
    pairs: list[tuple[str, str]] = []
    for raw in names:
        name = (raw or "").strip()
        slug = make_slug(name)
        if slug in seen:
            continue
        seen.add(slug)
        pairs.append((slug, name))
    return pairs
