"""
Адаптер хранилища постов.
"""

from typing import Any, Dict, List, Optional

from sqlalchemy import delete, desc, func, select, update

from app.db.models import Post

from .base import BaseStore


class PostStore(BaseStore):
    """CRUD и счетчики над постами."""

    def insert(self, post: Post) -> Post:
        with self._guard("Insert post"):
            self.db.add(post)
            self.db.commit()
            self.db.refresh(post)
        return post

    def find_by_id(self, post_id: str) -> Optional[Post]:
        with self._guard("Find post"):
            return self.db.get(Post, post_id)

    def find_many(
        self,
        category_id: Optional[str] = None,
        author_email: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Post]:
        """
        Найти посты, новые первыми.

        Args:
            category_id: Фильтр по категории
            author_email: Фильтр по автору (объединяется с category_id через AND)
            limit: Максимум записей; 0 или None - без ограничения
        """
        stmt = select(Post)
        if category_id is not None:
            stmt = stmt.where(Post.category_id == category_id)
        if author_email is not None:
            stmt = stmt.where(Post.author_email == author_email)
        stmt = stmt.order_by(desc(Post.created_at))
        if limit:
            stmt = stmt.limit(limit)

        with self._guard("List posts"):
            return list(self.db.scalars(stmt).all())

    def update_by_id(self, post_id: str, patch: Dict[str, Any]) -> Optional[Post]:
        """Применить patch к посту. Возвращает обновленный пост или None."""
        with self._guard("Update post"):
            post = self.db.get(Post, post_id)
            if post is None:
                return None
            for field, value in patch.items():
                setattr(post, field, value)
            self.db.commit()
            self.db.refresh(post)
        return post

    def delete_by_id(self, post_id: str) -> bool:
        with self._guard("Delete post"):
            result = self.db.execute(delete(Post).where(Post.id == post_id))
            self.db.commit()
        return result.rowcount > 0

    def count_by_category_id(self, category_id: str) -> int:
        stmt = select(func.count()).select_from(Post).where(Post.category_id == category_id)
        with self._guard("Count posts"):
            return self.db.scalar(stmt) or 0

    def increment_views(self, post_id: str) -> Optional[Post]:
        """
        Атомарно увеличить счетчик просмотров на 1.

        Один UPDATE ... SET views = views + 1 RETURNING, без чтения
        перед записью, поэтому параллельные просмотры не теряются.
        """
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(views=Post.views + 1)
            .returning(Post)
        )
        with self._guard("Increment views"):
            post = self.db.scalars(stmt).one_or_none()
            self.db.commit()
            if post is not None:
                self.db.refresh(post)
        return post
