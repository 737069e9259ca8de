# vibepm/api/settings.py
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import Any, Dict

from vibepm.schemas.settings import Preferences
from vibepm.schemas.response import SuccessResponse
from vibepm.crud.settings import get_all_settings, upsert_settings, get_preferences
from vibepm.dependencies import get_db
from vibepm.core.exceptions import ValidationError
import logging

logger = logging.getLogger("VibePM.SettingsAPI")

router = APIRouter(prefix="/api/settings", tags=["Settings"])

@router.get("", response_model=Dict[str, Any])
def read_settings(db: Session = Depends(get_db)):
    """
    Все сохранённые настройки: {key: value}.
    """
    try:
        return get_all_settings(db)
    except Exception as e:
        logger.error(f"Failed to fetch settings: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch settings")

@router.put("", response_model=SuccessResponse)
def write_settings(values: Dict[str, Any] = Body(...), db: Session = Depends(get_db)):
    """
    Создать или обновить переданные настройки (upsert по ключу).
    """
    try:
        upsert_settings(db, values)
        return SuccessResponse()
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update settings: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update settings")

@router.get("/effective", response_model=Preferences)
def read_effective_settings(db: Session = Depends(get_db)):
    """
    Типизированные настройки с подставленными значениями по умолчанию.
    """
    try:
        return get_preferences(db)
    except Exception as e:
        logger.error(f"Failed to resolve preferences: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch settings")
