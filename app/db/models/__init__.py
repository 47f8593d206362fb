"""
Модели базы данных.

Импортирует все модели для корректной работы SQLAlchemy.
"""

from .base import Base
from .category import Category
from .post import Post

__all__ = [
    "Base",
    "Category",
    "Post",
]
