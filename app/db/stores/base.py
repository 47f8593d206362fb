"""
Общая часть адаптеров хранилища.

Переводит ошибки SQLAlchemy в типизированные ошибки приложения.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session

from app.core.errors import DuplicateKey, StoreError, StoreUnavailable

logger = logging.getLogger(__name__)


class BaseStore:
    """Базовый адаптер, работающий в рамках одной сессии."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """
        Выполнить операцию хранилища с переводом ошибок.

        IntegrityError -> DuplicateKey, OperationalError и таймаут пула ->
        StoreUnavailable, прочие ошибки SQLAlchemy -> StoreError.
        """
        try:
            yield
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateKey(f"{operation}: duplicate key", diagnostic=str(e.orig)) from e
        except (OperationalError, PoolTimeoutError) as e:
            self.db.rollback()
            logger.error(f"{operation} failed, store unavailable: {e}")
            raise StoreUnavailable(f"{operation}: store unavailable", diagnostic=str(e)) from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"{operation} failed: {e}")
            raise StoreError(f"{operation} failed", diagnostic=str(e)) from e
