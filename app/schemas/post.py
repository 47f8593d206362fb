"""
Схемы для постов.

На проводе используются camelCase имена (categoryId, imageUrl, createdAt),
внутри - snake_case.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class PostIn(_CamelModel):
    """
    Тело запроса для создания и обновления поста.

    Обязательность полей проверяет сервис, чтобы ошибка была 400, а не 422.
    Автор берется из токена, поле author в теле игнорируется.
    """

    title: Optional[str] = None
    content: Optional[str] = None
    category: Optional[str] = None
    category_id: Optional[str] = None
    image_url: Optional[str] = Field(None, description="Ссылка на обложку")


class PostOut(_CamelModel):
    """Схема для вывода поста."""

    id: str
    title: str
    content: str
    category: str
    category_id: str
    slug: str
    image_url: str = ""
    author: Dict[str, Any]
    views: int = 0
    created_at: datetime
    updated_at: datetime


class ViewOut(BaseModel):
    """Результат увеличения счетчика просмотров."""

    success: bool = True
    views: int


class DeleteOut(_CamelModel):
    """Результат удаления поста."""

    message: str = "Post deleted"
    category_deleted: bool
