# vibepm/crud/quick_capture.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.base import utcnow
from vibepm.models.project import Project
from vibepm.models.quick_capture import QuickCapture
from vibepm.core.exceptions import CaptureNotFound, CaptureValidationError, ProjectNotFound
from vibepm.services.analysis import parse_analysis

logger = logging.getLogger("VibePM.QuickCapture")

def _clean_analysis(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None

def split_content(content: str, analysis: Optional[str] = None) -> Tuple[str, Optional[str]]:
    """
    Текст в старом формате (идея + маркер + анализ) раскладывается на две колонки.
    Явно переданный analysis важнее того, что был в тексте.
    """
    parsed = parse_analysis(content)
    raw_idea = parsed.raw_idea.strip()
    if analysis is not None:
        return raw_idea, _clean_analysis(analysis)
    return raw_idea, _clean_analysis(parsed.analysis)

def _validate_project(db: Session, project_id: Optional[str]) -> Optional[str]:
    if not project_id:
        return None
    if db.get(Project, project_id) is None:
        raise ProjectNotFound()
    return project_id

def create_capture(db: Session, data: dict) -> QuickCapture:
    content = data.get("content") or ""
    if not content.strip():
        raise CaptureValidationError("Content is required")
    raw_idea, analysis = split_content(content, data.get("analysis"))
    if not raw_idea:
        raise CaptureValidationError("Content is required")

    capture = QuickCapture(
        content=raw_idea,
        analysis=analysis,
        project_id=_validate_project(db, data.get("project_id")),
    )
    db.add(capture)
    try:
        db.commit()
        db.refresh(capture)
        logger.info(f"Created quick capture {capture.id}")
        return capture
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create quick capture: {e}")
        raise

def get_all_captures(db: Session, deleted: bool = False) -> List[QuickCapture]:
    """
    Идеи (новые сверху) или корзина (недавно удалённые сверху).
    """
    query = db.query(QuickCapture)
    if deleted:
        return query.filter(QuickCapture.deleted_at.isnot(None)).order_by(QuickCapture.deleted_at.desc()).all()
    return query.filter(QuickCapture.deleted_at.is_(None)).order_by(QuickCapture.created_at.desc()).all()

def get_capture(db: Session, capture_id: str) -> QuickCapture:
    capture = db.get(QuickCapture, capture_id)
    if not capture:
        raise CaptureNotFound()
    return capture

def update_capture(db: Session, capture_id: str, data: dict) -> QuickCapture:
    """
    Меняет текст, анализ и/или привязку к проекту. Новый анализ заменяет прежний.
    """
    capture = get_capture(db, capture_id)

    changes = {}
    if data.get("content") is not None:
        raw_idea, analysis = split_content(data["content"], data.get("analysis"))
        if not raw_idea:
            raise CaptureValidationError("Content cannot be empty")
        changes["content"] = raw_idea
        if analysis is not None or "analysis" in data:
            changes["analysis"] = analysis
    elif "analysis" in data:
        changes["analysis"] = _clean_analysis(data["analysis"])
    if "project_id" in data:
        changes["project_id"] = _validate_project(db, data["project_id"])

    for field, value in changes.items():
        setattr(capture, field, value)
    try:
        db.commit()
        db.refresh(capture)
        logger.info(f"Updated quick capture {capture.id} fields: {sorted(changes.keys())}")
        return capture
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update quick capture: {e}")
        raise

def soft_delete_capture(db: Session, capture_id: str) -> QuickCapture:
    capture = get_capture(db, capture_id)
    capture.deleted_at = utcnow()
    try:
        db.commit()
        logger.info(f"Soft-deleted quick capture {capture.id}")
        return capture
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete quick capture: {e}")
        raise

def hard_delete_capture(db: Session, capture_id: str) -> None:
    capture = get_capture(db, capture_id)
    try:
        db.delete(capture)
        db.commit()
        logger.info(f"Permanently deleted quick capture {capture_id}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete quick capture: {e}")
        raise

def restore_capture(db: Session, capture_id: str) -> QuickCapture:
    capture = get_capture(db, capture_id)
    if capture.deleted_at is None:
        raise CaptureValidationError("Capture is not deleted")
    capture.deleted_at = None
    try:
        db.commit()
        db.refresh(capture)
        logger.info(f"Restored quick capture {capture.id}")
        return capture
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to restore capture: {e}")
        raise
