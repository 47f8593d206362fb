"""
Адаптер хранилища категорий.

Только доступ к данным: бизнес-правил здесь нет, посты не запрашиваются.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, select

from app.db.models import Category

from .base import BaseStore


def name_key(name: str) -> str:
    """Ключ сравнения имен без учета регистра."""
    return name.casefold()


class CategoryStore(BaseStore):
    """CRUD над категориями."""

    def find_all(self) -> List[Category]:
        with self._guard("List categories"):
            return list(self.db.scalars(select(Category).order_by(Category.name)).all())

    def find_by_name_case_insensitive(self, name: str) -> Optional[Category]:
        stmt = select(Category).where(Category.name_key == name_key(name))
        with self._guard("Find category by name"):
            return self.db.scalars(stmt).first()

    def find_by_id(self, category_id: str) -> Optional[Category]:
        with self._guard("Find category"):
            return self.db.get(Category, category_id)

    def insert(self, name: str, slug: str, created_at: datetime) -> Category:
        """
        Вставить категорию.

        Raises:
            DuplicateKey: Категория с таким именем уже вставлена параллельно
        """
        category = Category(
            name=name, name_key=name_key(name), slug=slug, created_at=created_at
        )
        with self._guard("Insert category"):
            self.db.add(category)
            self.db.commit()
            self.db.refresh(category)
        return category

    def delete_by_id(self, category_id: str) -> bool:
        with self._guard("Delete category"):
            result = self.db.execute(delete(Category).where(Category.id == category_id))
            self.db.commit()
        return result.rowcount > 0
