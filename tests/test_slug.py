"""Тесты генерации slug."""

import re

import pytest

from app.core.slug import slugify_name, slugify_title


class TestSlugifyName:
    def test_lowercases_and_hyphenates_whitespace(self):
        assert slugify_name("Machine Learning") == "machine-learning"

    def test_collapses_whitespace_runs(self):
        assert slugify_name("Web   \t Dev") == "web-dev"

    def test_keeps_punctuation(self):
        assert slugify_name("C++ Tips") == "c++-tips"

    def test_empty(self):
        assert slugify_name("") == ""


class TestSlugifyTitle:
    def test_hello_world(self):
        assert slugify_title("Hello World!") == "hello-world"

    def test_collapses_non_alphanumeric_runs(self):
        assert slugify_title("FastAPI -- & SQLAlchemy 2.0") == "fastapi-sqlalchemy-2-0"

    def test_strips_leading_and_trailing_hyphen(self):
        assert slugify_title("  ¿Qué tal?  ") == "qu-tal"

    def test_only_symbols_gives_empty(self):
        assert slugify_title("!!!") == ""

    @pytest.mark.parametrize(
        "title",
        ["Hello World!", "  spaced out  ", "Ünïcödé Title", "a--b", "-x-", "2024: A Review"],
    )
    def test_slug_alphabet(self, title):
        slug = slugify_title(title)
        assert re.fullmatch(r"[a-z0-9-]*", slug)
        assert not slug.startswith("-")
        assert not slug.endswith("-")
