"""
Генерация slug для категорий и постов.
"""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]+")


def slugify_name(text: str) -> str:
    """Slug категории: нижний регистр, пробелы заменяются дефисом."""
    return _WHITESPACE_RE.sub("-", text.lower())


def slugify_title(text: str) -> str:
    """
    Slug поста.

    Любая последовательность символов вне [a-z0-9] заменяется одним
    дефисом, затем снимается по одному дефису в начале и в конце.

    Example:
        slugify_title("Hello World!") == "hello-world"
    """
    slug = _NON_ALNUM_RE.sub("-", text.lower())
    if slug.startswith("-"):
        slug = slug[1:]
    if slug.endswith("-"):
        slug = slug[:-1]
    return slug
