"""Tests for slug derivation."""

import pytest

from blog_api.core import errors, slugs


class TestMakeSlug:
    def test_lowercases_and_hyphenates(self) -> None:
        assert slugs.make_slug("Hello World") == "hello-world"

    def test_trims_before_deriving(self) -> None:
        assert slugs.make_slug("  Hello World \n") == slugs.make_slug("Hello World")

    def test_is_idempotent(self) -> None:
        slug = slugs.make_slug("Python Tips & Tricks")
        assert slugs.make_slug(slug) == slug

    def test_transliterates_non_latin_names(self) -> None:
        slug = slugs.make_slug("категория 1")
        assert slug
        assert slug.isascii()

    def test_is_capped_at_column_length(self) -> None:
        assert len(slugs.make_slug("word " * 40)) <= slugs.MAX_SLUG_LENGTH

    @pytest.mark.parametrize("name", ["", "   ", "!!!"])
    def test_rejects_names_without_slug(self, name: str) -> None:
        with pytest.raises(errors.ValidationError):
            slugs.make_slug(name)


class TestUniqueSlugs:
    def test_keeps_first_occurrence_in_order(self) -> None:
        pairs = slugs.unique_slugs(["Beta", "alpha", " beta ", "Alpha"])
        assert pairs == [("beta", "Beta"), ("alpha", "alpha")]

    def test_empty_input(self) -> None:
        assert slugs.unique_slugs([]) == []
