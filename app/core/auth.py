"""
Модуль аутентификации.

Проверка bearer токенов (JWT, подписанных общим секретом) и
извлечение личности вызывающего.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.config import settings
from app.core.errors import (
    ExpiredCredential,
    InvalidCredential,
    MalformedCredential,
    MissingCredential,
)

logger = logging.getLogger(__name__)

# Зарегистрированные claims, которые не являются частью личности
RESERVED_CLAIMS = ("exp", "iat", "nbf")

# HTTP Bearer схема (только для документации OpenAPI, разбор заголовка ниже)
security = HTTPBearer(auto_error=False)


class Identity(BaseModel):
    """Личность вызывающего, извлеченная из токена."""

    email: str
    name: Optional[str] = None
    picture: Optional[str] = None

    class Config:
        extra = "allow"


class AuthService:
    """Сервис для работы с bearer токенами."""

    def __init__(
        self,
        secret_key: str = settings.SECRET_KEY,
        algorithm: str = settings.JWT_ALGORITHM,
        expire_minutes: int = settings.ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def create_access_token(
        self, data: dict, expires_delta: Optional[timedelta] = None
    ) -> str:
        """Создание JWT токена."""
        to_encode = data.copy()
        if expires_delta is None:
            expires_delta = timedelta(minutes=self.expire_minutes)

        to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    @staticmethod
    def extract_token(authorization: Optional[str]) -> str:
        """
        Извлечь токен из заголовка Authorization.

        Raises:
            MissingCredential: Заголовок отсутствует
            MalformedCredential: В заголовке нет сегмента с токеном
        """
        if not authorization or not authorization.strip():
            raise MissingCredential("No token provided")

        parts = authorization.split()
        if len(parts) != 2 or parts[0].lower() != "bearer":
            raise MalformedCredential("Token error: expected 'Bearer <token>'")
        return parts[1]

    def verify_token(self, token: str) -> Identity:
        """
        Проверка JWT токена.

        Raises:
            ExpiredCredential: Подпись верна, но срок действия истек
            InvalidCredential: Любая другая ошибка подписи или формата
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise ExpiredCredential("Token expired") from e
        except jwt.PyJWTError as e:
            raise InvalidCredential("Invalid token", diagnostic=str(e)) from e

        if not isinstance(payload.get("email"), str) or not payload["email"]:
            raise InvalidCredential("Token payload has no email")

        claims = {k: v for k, v in payload.items() if k not in RESERVED_CLAIMS}
        try:
            return Identity(**claims)
        except PydanticValidationError as e:
            raise InvalidCredential("Invalid token payload", diagnostic=str(e)) from e

    def verify(self, authorization: Optional[str]) -> Identity:
        """Полная проверка заголовка Authorization."""
        return self.verify_token(self.extract_token(authorization))


# Экспорт сервиса
auth_service = AuthService()


def get_current_identity(
    request: Request,
    _credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """Получение личности вызывающего из заголовка Authorization."""
    try:
        return auth_service.verify(request.headers.get("Authorization"))
    except (MissingCredential, MalformedCredential, ExpiredCredential, InvalidCredential) as e:
        logger.info(f"Rejected credential on {request.url.path}: {e.message}")
        raise
