"""
Клиент хранилища.

Подключение создается один раз при старте приложения и
переиспользуется всеми запросами. Жизненный цикл:
создание -> connect() -> готов к работе -> dispose().
"""

import logging
from typing import Generator, Optional

from fastapi import Depends, Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import settings
from app.core.errors import StoreUnavailable
from app.db.models import Base

logger = logging.getLogger(__name__)


class Database:
    """
    Клиент хранилища с ограниченным пулом соединений.

    Attributes:
        url: URL подключения
        pool_size: Максимум одновременных соединений
        pool_timeout: Ожидание свободного соединения, сек
        connect_timeout: Таймаут установки соединения, сек
    """

    def __init__(
        self,
        url: str = settings.DATABASE_URL,
        pool_size: int = settings.DB_POOL_SIZE,
        max_overflow: int = settings.DB_MAX_OVERFLOW,
        pool_timeout: float = settings.DB_POOL_TIMEOUT,
        connect_timeout: int = settings.DB_CONNECT_TIMEOUT,
        pool_recycle: int = settings.DB_POOL_RECYCLE,
        echo: bool = settings.DEBUG,
    ):
        self.url = url
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.connect_timeout = connect_timeout
        self.pool_recycle = pool_recycle
        self.echo = echo

        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def is_ready(self) -> bool:
        return self._session_factory is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StoreUnavailable("Database is not connected")
        return self._engine

    def _engine_options(self) -> dict:
        if self.url.startswith("sqlite"):
            options = {
                "connect_args": {
                    "check_same_thread": False,
                    "timeout": self.connect_timeout,
                },
            }
            # In-memory SQLite живет, пока живо единственное соединение
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                options["poolclass"] = StaticPool
            return options

        return {
            "pool_size": self.pool_size,
            "max_overflow": self.max_overflow,
            "pool_timeout": self.pool_timeout,
            "pool_recycle": self.pool_recycle,
            "pool_pre_ping": True,  # Проверка соединения перед использованием
            "connect_args": {"connect_timeout": self.connect_timeout},
        }

    def connect(self, create_tables: bool = False) -> "Database":
        """
        Создать движок и фабрику сессий.

        Args:
            create_tables: Создать отсутствующие таблицы

        Raises:
            StoreUnavailable: Хранилище не отвечает
        """
        if self.is_ready:
            return self

        engine = create_engine(
            self.url, future=True, echo=self.echo, **self._engine_options()
        )
        try:
            if create_tables:
                Base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            engine.dispose()
            logger.error(f"Could not connect to store: {e}")
            raise StoreUnavailable("Could not connect to store", diagnostic=str(e)) from e

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine, autoflush=False, autocommit=False, future=True
        )
        logger.info(f"Connected to store ({engine.url.get_backend_name()})")
        return self

    def session(self) -> Session:
        if self._session_factory is None:
            raise StoreUnavailable("Database is not connected")
        return self._session_factory()

    def ping(self) -> bool:
        """Проверка доступности хранилища."""
        if not self.is_ready:
            return False
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning(f"Store ping failed: {e}")
            return False

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._session_factory = None


def get_database(request: Request) -> Database:
    """Dependency: клиент хранилища, созданный при старте приложения."""
    database = getattr(request.app.state, "database", None)
    if database is None:
        raise StoreUnavailable("Database is not connected")
    return database


def get_db(database: Database = Depends(get_database)) -> Generator:
    """
    Dependency для получения сессии базы данных.

    Yields:
        Session: Сессия SQLAlchemy

    Note:
        Автоматически закрывает сессию после использования
    """
    db = database.session()
    try:
        yield db
    finally:
        db.close()
