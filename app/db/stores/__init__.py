"""
Адаптеры хранилища.
"""

from .category_store import CategoryStore
from .post_store import PostStore

__all__ = [
    "CategoryStore",
    "PostStore",
]
