"""
Главный модуль FastAPI приложения Blog Content API.

Содержит конфигурацию приложения, middleware, обработку ошибок и роутеры.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routers import api_router
from app.core.config import settings
from app.core.errors import ContentAPIError, StoreError
from app.db.database import Database

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

# Создание экземпляра FastAPI приложения
app = FastAPI(
    title="Blog Content API",
    description="API категорий и постов с подсчетом просмотров",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Настройка CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ContentAPIError)
async def content_api_error_handler(request: Request, exc: ContentAPIError):
    """
    Перевод типизированных ошибок в HTTP ответ.

    Для ошибок хранилища добавляется диагностика драйвера.
    """
    body = {"detail": exc.message}
    if isinstance(exc, StoreError):
        logger.error(f"{request.method} {request.url.path}: {exc.message} ({exc.diagnostic})")
        if exc.diagnostic:
            body["error"] = exc.diagnostic

    headers = None
    if exc.status_code == 401:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=body, headers=headers)


@app.get("/healthz")
def healthz(request: Request):
    """
    Health check endpoint для мониторинга состояния приложения.

    Returns:
        dict: Статус приложения и доступность хранилища
    """
    database = getattr(request.app.state, "database", None)
    store_ok = database is not None and database.ping()
    return {
        "status": "ok" if store_ok else "degraded",
        "service": "Blog Content API",
        "version": "1.0.0",
        "store": store_ok,
    }


# Подключение API роутеров
app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    """
    Событие запуска приложения.

    Подключается к хранилищу один раз; соединения переиспользуются всеми запросами.
    """
    if getattr(app.state, "database", None) is None:
        app.state.database = Database().connect(create_tables=settings.DB_CREATE_TABLES)


@app.on_event("shutdown")
async def shutdown_event():
    """
    Событие завершения приложения.

    Закрывает пул соединений.
    """
    database = getattr(app.state, "database", None)
    if database is not None:
        database.dispose()
        app.state.database = None
