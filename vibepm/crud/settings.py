# vibepm/crud/settings.py
import json
import logging
from typing import Any, Dict

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.settings import AppSetting
from vibepm.core.exceptions import SettingValidationError
from vibepm.schemas.settings import Preferences
from vibepm.services.ai_config import decode_setting_value

logger = logging.getLogger("VibePM.Settings")

def get_all_settings(db: Session) -> Dict[str, Any]:
    """
    Все настройки как {key: декодированное значение}.
    """
    return {
        setting.key: decode_setting_value(setting.value)
        for setting in db.query(AppSetting).order_by(AppSetting.key).all()
    }

def upsert_settings(db: Session, values: Dict[str, Any]) -> None:
    """
    Создаёт или обновляет каждую переданную настройку; остальные ключи не трогаются.
    """
    if not isinstance(values, dict):
        raise SettingValidationError("Settings must be an object")
    for key in values:
        if not isinstance(key, str) or not key.strip():
            raise SettingValidationError("Setting key cannot be empty")

    for key, value in values.items():
        encoded = json.dumps(value)
        setting = db.get(AppSetting, key)
        if setting is None:
            db.add(AppSetting(key=key, value=encoded))
        else:
            setting.value = encoded
    try:
        db.commit()
        logger.info(f"Updated settings: {sorted(values.keys())}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update settings: {e}")
        raise

def get_preferences(db: Session) -> Preferences:
    """
    Типизированные настройки с дефолтами. Значения приводятся при чтении:
    некорректный ключ заменяется дефолтом, а не ломает весь набор.
    """
    stored = get_all_settings(db)
    accepted: Dict[str, Any] = {}
    for name, field in Preferences.model_fields.items():
        alias = field.alias or name
        if alias not in stored:
            continue
        try:
            Preferences.model_validate({alias: stored[alias]})
        except PydanticValidationError:
            logger.warning(f"Ignoring invalid stored value for setting '{alias}': {stored[alias]!r}")
            continue
        accepted[alias] = stored[alias]
    return Preferences.model_validate(accepted)
