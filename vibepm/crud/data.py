# vibepm/crud/data.py
"""
Операции над всеми данными сразу: экспорт, очистка, окончательное удаление корзины.
"""
import logging
from datetime import timedelta
from typing import Any, Dict

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.base import utcnow
from vibepm.models.project import Project
from vibepm.models.task import Task
from vibepm.models.prompt import Prompt
from vibepm.models.step import Step
from vibepm.models.phase import Phase, Decision
from vibepm.models.activity import Activity
from vibepm.models.quick_capture import QuickCapture
from vibepm.models.context_document import ContextDocument
from vibepm.models.settings import AppSetting
from vibepm.services.ai_config import decode_setting_value
from vibepm.services.analysis import append_analysis

logger = logging.getLogger("VibePM.Data")

EXPORT_VERSION = "1.0"

def capture_export_row(capture: QuickCapture) -> Dict[str, Any]:
    """
    В файле экспорта анализ идёт в content после маркера (формат версии 1.0).
    """
    content = append_analysis(capture.content, capture.analysis) if capture.analysis else capture.content
    return {
        "id": capture.id,
        "content": content,
        "project_id": capture.project_id,
        "deleted_at": capture.deleted_at,
        "created_at": capture.created_at,
        "updated_at": capture.updated_at,
    }

def setting_export_row(setting: AppSetting) -> Dict[str, Any]:
    return {
        "key": setting.key,
        "value": decode_setting_value(setting.value),
        "created_at": setting.created_at,
        "updated_at": setting.updated_at,
    }

def collect_export(db: Session) -> Dict[str, Any]:
    """
    Снимок всех сущностей (включая soft-deleted) для GET /api/export.
    """
    return {
        "projects": db.query(Project).order_by(Project.created_at).all(),
        "tasks": db.query(Task).order_by(Task.created_at).all(),
        "prompts": db.query(Prompt).order_by(Prompt.created_at).all(),
        "phases": db.query(Phase).order_by(Phase.created_at).all(),
        "decisions": db.query(Decision).order_by(Decision.created_at).all(),
        "quick_captures": [
            capture_export_row(c) for c in db.query(QuickCapture).order_by(QuickCapture.created_at).all()
        ],
        "activities": db.query(Activity).order_by(Activity.created_at).all(),
        "settings": [setting_export_row(s) for s in db.query(AppSetting).order_by(AppSetting.key).all()],
    }

def clear_data(db: Session) -> None:
    """
    Удаляет все данные, кроме настроек. Порядок — от зависимых таблиц к проектам.
    """
    try:
        for model in (Activity, Step, Prompt, Task, Phase, Decision, ContextDocument, QuickCapture, Project):
            deleted = db.query(model).delete(synchronize_session=False)
            logger.debug(f"Cleared {deleted} rows from {model.__tablename__}")
        db.commit()
        db.expire_all()
        logger.info("Cleared all data (settings kept)")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to clear data: {e}")
        raise

def purge_deleted(db: Session, retention_days: int) -> Dict[str, int]:
    """
    Окончательно удаляет проекты и идеи, лежащие в корзине дольше retention_days.
    """
    cutoff = utcnow() - timedelta(days=retention_days)
    projects = db.query(Project).filter(Project.deleted_at.isnot(None), Project.deleted_at < cutoff).all()
    captures = (
        db.query(QuickCapture)
        .filter(QuickCapture.deleted_at.isnot(None), QuickCapture.deleted_at < cutoff)
        .all()
    )
    try:
        for project in projects:
            for capture in project.quick_captures:
                capture.project_id = None
            db.delete(project)
        for capture in captures:
            db.delete(capture)
        db.commit()
        logger.info(
            f"Purged {len(projects)} projects and {len(captures)} captures deleted before {cutoff.isoformat()}"
        )
        return {"projects": len(projects), "quickCaptures": len(captures)}
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to purge deleted items: {e}")
        raise
