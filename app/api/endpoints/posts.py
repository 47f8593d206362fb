"""
API endpoints для работы с постами.

Чтение и счетчик просмотров публичны, изменения требуют bearer токен
и доступны только автору поста.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_content_service
from app.core.auth import Identity, get_current_identity
from app.schemas.post import DeleteOut, PostIn, PostOut, ViewOut
from app.services.content_service import ContentService

router = APIRouter()


@router.get("/posts", response_model=List[PostOut])
def list_posts(
    service: ContentService = Depends(get_content_service),
    limit: Optional[int] = Query(None, ge=0, description="Максимум постов, 0 - все"),
    author: Optional[str] = Query(None, description="Фильтр по email автора"),
    category_id: Optional[str] = Query(
        None, alias="categoryId", description="Фильтр по категории"
    ),
):
    """
    Получить посты, новые первыми.

    Фильтры author и categoryId объединяются через AND.
    """
    return service.list_posts(category_id=category_id, author_email=author, limit=limit)


@router.get("/posts/category/{category_id}", response_model=List[PostOut])
def list_posts_by_category(
    category_id: str, service: ContentService = Depends(get_content_service)
):
    """Посты одной категории, новые первыми."""
    return service.list_posts(category_id=category_id)


@router.get("/my-posts", response_model=List[PostOut])
def list_my_posts(
    identity: Identity = Depends(get_current_identity),
    service: ContentService = Depends(get_content_service),
):
    """Посты текущего пользователя."""
    return service.list_posts(author_email=identity.email)


@router.get("/posts/{post_id}", response_model=PostOut)
def get_post(post_id: str, service: ContentService = Depends(get_content_service)):
    """
    Получить пост по ID.

    Raises:
        NotFound: Если пост не найден
    """
    return service.get_post(post_id)


@router.post("/posts/{post_id}/view", response_model=ViewOut)
def increment_view(post_id: str, service: ContentService = Depends(get_content_service)):
    """Увеличить счетчик просмотров. Без аутентификации и ограничений."""
    return ViewOut(views=service.increment_view(post_id))


@router.post("/posts", response_model=PostOut, status_code=status.HTTP_201_CREATED)
def create_post(
    data: PostIn,
    identity: Identity = Depends(get_current_identity),
    service: ContentService = Depends(get_content_service),
):
    """
    Создать пост. Автор - владелец токена.

    Raises:
        ValidationError: Нет title, content или category
    """
    return service.create_post(data, identity)


@router.put("/posts/{post_id}", response_model=PostOut)
def update_post(
    post_id: str,
    data: PostIn,
    identity: Identity = Depends(get_current_identity),
    service: ContentService = Depends(get_content_service),
):
    """
    Обновить пост.

    Raises:
        NotFound: Если пост не найден
        Forbidden: Если вызывающий не автор
    """
    return service.update_post(post_id, data, identity)


@router.delete("/posts/{post_id}", response_model=DeleteOut)
def delete_post(
    post_id: str,
    identity: Identity = Depends(get_current_identity),
    service: ContentService = Depends(get_content_service),
):
    """
    Удалить пост. Категория удаляется вместе с последним постом.

    Raises:
        NotFound: Если пост не найден
        Forbidden: Если вызывающий не автор
    """
    return DeleteOut(category_deleted=service.delete_post(post_id, identity))
