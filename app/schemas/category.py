"""
Схемы для категорий.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class CategoryCreate(BaseModel):
    """Схема для создания категории."""

    name: Optional[str] = Field(None, description="Имя категории")


class CategoryOut(BaseModel):
    """Схема для вывода категории."""

    id: str
    name: str
    slug: str
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True
