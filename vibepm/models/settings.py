# vibepm/models/settings.py
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text
from vibepm.models.base import Base, utcnow

class AppSetting(Base):
    """
    AppSetting — глобальная настройка приложения: ключ и JSON-сериализованное значение.
    """
    __tablename__ = "app_settings"

    key: str = Column(String(128), primary_key=True, doc="Ключ настройки ('defaultAiModel', 'theme', ...)")
    value: str = Column(Text, nullable=False, doc="Значение в виде JSON-строки")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self):
        return f"<AppSetting(key='{self.key}')>"
