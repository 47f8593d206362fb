#!/usr/bin/env python3
"""
Скрипт для выпуска bearer токена для разработки.

Пример:
    python scripts/create_token.py alice@x.com --name Alice --minutes 60
"""

import argparse
import sys
from datetime import timedelta
from pathlib import Path

# Добавляем путь к модулю app
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.auth import auth_service


def create_token(email: str, name: str = None, minutes: int = None) -> str:
    """Выпускает токен, подписанный SECRET_KEY из настроек."""
    claims = {"email": email}
    if name:
        claims["name"] = name
    expires = timedelta(minutes=minutes) if minutes else None
    return auth_service.create_access_token(claims, expires_delta=expires)


def main():
    parser = argparse.ArgumentParser(description="Выпуск bearer токена")
    parser.add_argument("email", help="Email автора")
    parser.add_argument("--name", help="Отображаемое имя")
    parser.add_argument("--minutes", type=int, help="Время жизни токена, мин")
    args = parser.parse_args()

    token = create_token(args.email, args.name, args.minutes)
    print("🔑 Токен создан:")
    print(token)
    print(f"\nAuthorization: Bearer {token}")


if __name__ == "__main__":
    main()
