#!/usr/bin/env python3
"""
Скрипт для инициализации базы данных
"""

import sys
from pathlib import Path

# Добавляем путь к модулю app
sys.path.insert(0, str(Path(__file__).parent))

from sqlalchemy import inspect

from app.core.errors import StoreError
from app.db.database import Database


def init_database():
    """Создает все таблицы в базе данных."""
    print("🗄️ Инициализация базы данных...")

    try:
        database = Database().connect(create_tables=True)
    except StoreError as e:
        print(f"❌ Ошибка создания таблиц: {e.message} ({e.diagnostic})")
        return False

    try:
        print("✅ Все таблицы созданы успешно!")

        tables = inspect(database.engine).get_table_names()
        print(f"📋 Создано таблиц: {len(tables)}")
        for table in tables:
            print(f"  - {table}")
        return True
    finally:
        database.dispose()


if __name__ == "__main__":
    success = init_database()
    if not success:
        sys.exit(1)
