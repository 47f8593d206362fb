"""
Типизированные ошибки API.

Каждая ошибка знает свой HTTP статус; преобразование в ответ
выполняет обработчик, зарегистрированный в app.main.
"""

from typing import Optional


class ContentAPIError(Exception):
    """Базовая ошибка приложения."""

    status_code = 500

    def __init__(self, message: str, diagnostic: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.diagnostic = diagnostic


class ValidationError(ContentAPIError):
    """Некорректные или отсутствующие входные данные."""

    status_code = 400


class NotFound(ContentAPIError):
    status_code = 404


class Forbidden(ContentAPIError):
    """Пользователь аутентифицирован, но не имеет прав."""

    status_code = 403


# ==================== АУТЕНТИФИКАЦИЯ ====================


class AuthError(ContentAPIError):
    status_code = 401


class MissingCredential(AuthError):
    pass


class MalformedCredential(AuthError):
    pass


class ExpiredCredential(AuthError):
    pass


class InvalidCredential(AuthError):
    status_code = 403


# ==================== ХРАНИЛИЩЕ ====================


class StoreError(ContentAPIError):
    """Ошибка хранилища."""

    status_code = 500


class StoreUnavailable(StoreError):
    """Хранилище недоступно: таймаут подключения или пула."""


class DuplicateKey(StoreError):
    """Нарушение ограничения уникальности."""

    status_code = 409
