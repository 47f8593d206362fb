"""
Модель категории постов.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class Category(Base):
    """
    Модель категории постов.

    Категория создается при первом посте с новым именем и удаляется
    вместе с последним постом. Имя уникально без учета регистра, включая не-ASCII:
    ключ сравнения считается в Python, а не функцией lower() хранилища.

    Attributes:
        id: Уникальный идентификатор категории
        name: Отображаемое имя
        name_key: Имя, приведенное через casefold(); уникально
        slug: URL-friendly название категории
        created_at: Время создания
    """

    __tablename__ = "categories"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid4())
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_key: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), index=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"<Category(id='{self.id}', name='{self.name}')>"
