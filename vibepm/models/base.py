# vibepm/models/base.py
"""
Базовый класс для всех ORM-моделей проекта.

Использовать как Base при описании моделей:
    from vibepm.models.base import Base
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy.orm import declarative_base

Base = declarative_base()

def generate_id() -> str:
    """Непрозрачный строковый ID (uuid4 hex) для первичных ключей."""
    return uuid.uuid4().hex

def utcnow() -> datetime:
    """Текущее время в UTC (микросекунды нужны для стабильной сортировки по created_at)."""
    return datetime.now(timezone.utc)
