"""
Сервис контента.

Оркестрирует категории и посты: создание категории по имени без
дублей, создание/обновление/удаление постов с проверкой авторства,
каскадное удаление опустевших категорий и счетчик просмотров.

Известные окна гонок:
    - get_or_create_category проверяет существование, затем вставляет.
      Параллельная вставка того же имени отсекается уникальным ключом
      имени (casefold); проигравший получает DuplicateKey и перечитывает.
    - Каскад при удалении сначала считает оставшиеся посты, затем удаляет
      категорию. Пост, вставленный между подсчетом и удалением, останется
      со ссылкой на удаленную категорию. Это допустимая согласованность
      "в конечном счете", транзакцией не закрывается.
    - update_post находит или создает новую категорию до записи поста.
      Если запись затем падает, только что созданная категория остается
      без постов: каскад срабатывает только при удалении или переносе поста.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple
from uuid import UUID

from app.core.auth import Identity
from app.core.errors import DuplicateKey, Forbidden, NotFound, ValidationError
from app.core.slug import slugify_name, slugify_title
from app.db.models import Category, Post
from app.db.stores import CategoryStore, PostStore
from app.schemas.post import PostIn

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def validate_id(value: Optional[str], kind: str = "id") -> str:
    """Проверить, что идентификатор синтаксически корректен."""
    try:
        return str(UUID(str(value)))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {kind}: {value!r}") from None


def _require(value: Optional[str], field: str) -> str:
    """Проверить, что поле не пустое. Значение возвращается как есть."""
    if value is None or not value.strip():
        raise ValidationError(f"Field '{field}' is required")
    return value


class ContentService:
    """
    Ядро бизнес-логики над категориями и постами.

    Адаптеры хранилища не содержат правил; каскад и проверка авторства
    живут только здесь.
    """

    def __init__(
        self,
        categories: CategoryStore,
        posts: PostStore,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.categories = categories
        self.posts = posts
        self.clock = clock

    # ==================== АВТОРИЗАЦИЯ ====================

    @staticmethod
    def is_author(post: Post, identity: Identity) -> bool:
        """Является ли вызывающий автором поста. Администраторов нет."""
        return (post.author or {}).get("email") == identity.email

    def _check_author(self, post: Post, identity: Identity, action: str) -> None:
        if not self.is_author(post, identity):
            logger.warning(f"{identity.email} is not allowed to {action} post {post.id}")
            raise Forbidden(f"You can only {action} your own posts")

    # ==================== КАТЕГОРИИ ====================

    def list_categories(self) -> List[Category]:
        return self.categories.find_all()

    def get_category(self, category_id: str) -> Category:
        category = self.categories.find_by_id(validate_id(category_id, "category id"))
        if category is None:
            raise NotFound("Category not found")
        return category

    def get_or_create_category(self, name: Optional[str]) -> Tuple[Category, bool]:
        """
        Найти категорию по имени без учета регистра или создать новую.

        Returns:
            Tuple[Category, bool]: Категория и флаг "создана сейчас"

        Raises:
            ValidationError: Пустое имя
        """
        name = _require(name, "name").strip()

        existing = self.categories.find_by_name_case_insensitive(name)
        if existing is not None:
            return existing, False

        try:
            category = self.categories.insert(name, slugify_name(name), self.clock())
        except DuplicateKey:
            # Параллельный запрос успел вставить то же имя
            existing = self.categories.find_by_name_case_insensitive(name)
            if existing is None:
                raise
            return existing, False

        logger.info(f"Category created: {category.name} ({category.id})")
        return category, True

    def _resolve_category(self, data: PostIn, category_name: str) -> Category:
        """Категория для записи поста: по переданному id или по имени."""
        if data.category_id:
            category = self.categories.find_by_id(validate_id(data.category_id, "category id"))
            if category is not None:
                return category
        category, _ = self.get_or_create_category(category_name)
        return category

    def _delete_category_if_orphaned(self, category_id: str) -> bool:
        remaining = self.posts.count_by_category_id(category_id)
        if remaining:
            return False
        deleted = self.categories.delete_by_id(category_id)
        if deleted:
            logger.info(f"Category {category_id} deleted: no posts left")
        return deleted

    # ==================== ПОСТЫ ====================

    def list_posts(
        self,
        category_id: Optional[str] = None,
        author_email: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[Post]:
        """Посты, новые первыми. limit 0 или None - без ограничения."""
        if limit is not None and limit < 0:
            raise ValidationError("Limit must be non-negative")
        if category_id is not None:
            category_id = validate_id(category_id, "category id")
        return self.posts.find_many(
            category_id=category_id, author_email=author_email, limit=limit
        )

    def get_post(self, post_id: str) -> Post:
        post = self.posts.find_by_id(validate_id(post_id, "post id"))
        if post is None:
            raise NotFound("Post not found")
        return post

    def create_post(self, data: PostIn, identity: Identity) -> Post:
        """
        Создать пост от имени вызывающего.

        Raises:
            ValidationError: Нет заголовка, текста или категории
        """
        title = _require(data.title, "title")
        content = _require(data.content, "content")
        category = self._resolve_category(data, _require(data.category, "category").strip())

        now = self.clock()
        post = Post(
            title=title,
            content=content,
            category=category.name,
            category_id=category.id,
            slug=slugify_title(title),
            image_url=data.image_url or "",
            author=identity.model_dump(exclude_none=True),
            author_email=identity.email,
            views=0,
            created_at=now,
            updated_at=now,
        )
        post = self.posts.insert(post)
        logger.info(f"Post created: {post.id} by {identity.email}")
        return post

    def update_post(self, post_id: str, data: PostIn, identity: Identity) -> Post:
        """
        Обновить пост. Только автор; createdAt, views и author не меняются.

        Если пост переехал в другую категорию, старая категория удаляется,
        когда в ней не осталось постов.

        Raises:
            ValidationError: Некорректный id или нет обязательных полей
            NotFound: Пост не найден
            Forbidden: Вызывающий не автор
        """
        post_id = validate_id(post_id, "post id")
        title = _require(data.title, "title")
        content = _require(data.content, "content")
        category_name = _require(data.category, "category").strip()

        post = self.posts.find_by_id(post_id)
        if post is None:
            raise NotFound("Post not found")
        self._check_author(post, identity, "update")

        previous_category_id = post.category_id
        category = self._resolve_category(data, category_name)

        patch = {
            "title": title,
            "content": content,
            "category": category.name,
            "category_id": category.id,
            "slug": slugify_title(title),
            "updated_at": self.clock(),
        }
        if data.image_url is not None:
            patch["image_url"] = data.image_url

        updated = self.posts.update_by_id(post_id, patch)
        if updated is None:
            raise NotFound("Post not found")
        logger.info(f"Post updated: {post_id} by {identity.email}")

        if previous_category_id != category.id:
            self._delete_category_if_orphaned(previous_category_id)
        return updated

    def delete_post(self, post_id: str, identity: Identity) -> bool:
        """
        Удалить пост и, если он был последним, его категорию.

        Ошибка на шаге каскада пробрасывается, но удаление поста не
        откатывается.

        Returns:
            bool: Была ли удалена категория
        """
        post_id = validate_id(post_id, "post id")

        post = self.posts.find_by_id(post_id)
        if post is None:
            raise NotFound("Post not found")
        self._check_author(post, identity, "delete")

        category_id = post.category_id
        if not self.posts.delete_by_id(post_id):
            raise NotFound("Post not found")
        logger.info(f"Post deleted: {post_id} by {identity.email}")

        return self._delete_category_if_orphaned(category_id)

    def increment_view(self, post_id: str) -> int:
        """Увеличить счетчик просмотров. Возвращает новое значение."""
        post = self.posts.increment_views(validate_id(post_id, "post id"))
        if post is None:
            raise NotFound("Post not found")
        return post.views
