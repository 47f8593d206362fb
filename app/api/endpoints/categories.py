"""
API endpoints для работы с категориями.

Чтение доступно всем, создание требует bearer токен.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_content_service
from app.core.auth import Identity, get_current_identity
from app.schemas.category import CategoryCreate, CategoryOut
from app.services.content_service import ContentService

router = APIRouter()


@router.get("", response_model=List[CategoryOut])
def list_categories(service: ContentService = Depends(get_content_service)):
    """
    Получить список всех категорий, отсортированный по имени.

    Example:
        [{"id": "6f1c...", "name": "Tech", "slug": "tech", "createdAt": "..."}]
    """
    return service.list_categories()


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryCreate,
    response: Response,
    identity: Identity = Depends(get_current_identity),
    service: ContentService = Depends(get_content_service),
):
    """
    Создать категорию или вернуть существующую с тем же именем.

    Returns:
        CategoryOut: 201 для новой категории, 200 для существующей

    Raises:
        ValidationError: Пустое имя
    """
    category, created = service.get_or_create_category(data.name)
    if not created:
        response.status_code = status.HTTP_200_OK
    return category


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: str, service: ContentService = Depends(get_content_service)):
    """
    Получить категорию по ID.

    Raises:
        NotFound: Если категория не найдена
    """
    return service.get_category(category_id)
