"""
Основной роутер API.

Подключает все endpoint'ы приложения.
"""

from fastapi import APIRouter

from app.api.endpoints import categories, posts

# Создание основного роутера API
api_router = APIRouter()

# Подключение роутеров для различных ресурсов
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(posts.router, tags=["posts"])
