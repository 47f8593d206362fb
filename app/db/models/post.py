"""
Модель поста.
"""

from datetime import datetime
from typing import Any, Dict
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Post(Base):
    """
    Модель поста.

    Attributes:
        id: Уникальный идентификатор поста
        title: Заголовок
        content: Текст поста
        category: Имя категории на момент записи
        category_id: ID категории (без внешнего ключа)
        slug: URL-friendly заголовок
        image_url: Ссылка на обложку
        author: Встроенный документ с личностью автора
        author_email: Email автора для фильтрации
        views: Счетчик просмотров
        created_at: Время создания
        updated_at: Время последнего изменения
    """

    __tablename__ = "posts"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(255), nullable=False)
    category_id: Mapped[str] = mapped_column(String(36), index=True, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str] = mapped_column(Text, default="", nullable=False)

    author: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)
    author_email: Mapped[str] = mapped_column(String(255), index=True, nullable=False)

    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # Временные метки
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), index=True, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Post(id='{self.id}', title='{self.title}')>"
