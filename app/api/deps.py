"""
Общие зависимости эндпоинтов.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.db.stores import CategoryStore, PostStore
from app.services.content_service import ContentService


def get_content_service(db: Session = Depends(get_db)) -> ContentService:
    """Сервис контента поверх сессии текущего запроса."""
    return ContentService(CategoryStore(db), PostStore(db))
