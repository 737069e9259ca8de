# vibepm/services/ai_config.py
import json
import logging
from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.core.settings import settings
from vibepm.models.settings import AppSetting

logger = logging.getLogger("VibePM.AIConfig")

OPENAI = "openai"
ANTHROPIC = "anthropic"
GOOGLE = "google"

DEFAULT_MODEL = "gpt-4o"

# Модель из настроек -> провайдер
MODEL_PROVIDERS = {
    "gpt-5.2": OPENAI,
    "gpt-4": OPENAI,
    "gpt-4-turbo": OPENAI,
    "gpt-4o": OPENAI,
    "gpt-4o-mini": OPENAI,
    "gpt-3.5-turbo": OPENAI,
    "claude-3-opus": ANTHROPIC,
    "claude-3-sonnet": ANTHROPIC,
    "claude-3-haiku": ANTHROPIC,
    "gemini-pro": GOOGLE,
    "gemini-2.5-pro": GOOGLE,
    "gemini-2.5-flash": GOOGLE,
    "gemini-1.5-pro": GOOGLE,
    "gemini-1.5-flash": GOOGLE,
}

# провайдер -> (ключ в app_settings, атрибут Settings с переменной окружения)
API_KEY_SOURCES = {
    OPENAI: ("openaiApiKey", "OPENAI_API_KEY"),
    ANTHROPIC: ("anthropicApiKey", "ANTHROPIC_API_KEY"),
    GOOGLE: ("googleApiKey", "GOOGLE_API_KEY"),
}

@dataclass(frozen=True)
class AIConfig:
    provider: str
    model: str
    api_key: str

def decode_setting_value(raw: str) -> Any:
    """
    Значения настроек хранятся как JSON; старые/ручные значения могут быть «сырой» строкой.
    """
    try:
        return json.loads(raw)
    except (TypeError, ValueError):
        return raw

def get_setting(db: Session, key: str) -> Optional[Any]:
    """
    Возвращает декодированное значение настройки или None (нет строки или ошибка чтения).
    """
    try:
        setting = db.get(AppSetting, key)
    except SQLAlchemyError as e:
        logger.warning(f"Failed to read setting '{key}': {e}")
        return None
    if setting is None:
        return None
    return decode_setting_value(setting.value)

def get_provider_from_model(model: str) -> str:
    return MODEL_PROVIDERS.get(model, OPENAI)

def get_api_key(db: Session, provider: str) -> Optional[str]:
    """
    Ключ провайдера: сначала app_settings, затем переменная окружения.
    """
    sources = API_KEY_SOURCES.get(provider)
    if sources is None:
        return None
    setting_key, env_attr = sources
    stored = get_setting(db, setting_key)
    if isinstance(stored, str) and stored.strip():
        return stored.strip()
    return getattr(settings, env_attr) or None

def get_ai_config(db: Session) -> Optional[AIConfig]:
    """
    Текущая конфигурация AI по настройке defaultAiModel. None означает «AI недоступен».
    """
    model = get_setting(db, "defaultAiModel")
    if not isinstance(model, str) or not model:
        model = DEFAULT_MODEL
    provider = get_provider_from_model(model)
    api_key = get_api_key(db, provider)
    if not api_key:
        logger.info(f"No API key configured for provider '{provider}' (model '{model}')")
        return None
    return AIConfig(provider=provider, model=model, api_key=api_key)
