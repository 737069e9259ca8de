# vibepm/crud/activity.py
import json
import logging
from typing import Any, List, Optional, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.activity import Activity
from vibepm.models.project import Project
from vibepm.core.exceptions import ActivityValidationError, ProjectNotFound

logger = logging.getLogger("VibePM.Activity")

def build_activity(
    project_id: str,
    type: str,
    title: str,
    description: Optional[str] = None,
    task_id: Optional[str] = None,
    prompt_id: Optional[str] = None,
    metadata: Any = None,
) -> Activity:
    """
    Собирает (не сохраняет) запись журнала; metadata сериализуется в JSON-строку.
    """
    return Activity(
        project_id=project_id,
        type=type,
        title=title,
        description=description,
        task_id=task_id,
        prompt_id=prompt_id,
        metadata_json=json.dumps(metadata) if metadata is not None else None,
    )

def create_activity(db: Session, data: dict) -> Activity:
    """
    Добавляет запись в журнал активности проекта.
    """
    project_id = data.get("project_id")
    type_ = (data.get("type") or "").strip()
    title = (data.get("title") or "").strip()
    if not project_id:
        raise ActivityValidationError("Project ID is required")
    if not type_ or not title:
        raise ActivityValidationError("Type and title are required")
    if db.get(Project, project_id) is None:
        raise ProjectNotFound()

    activity = build_activity(
        project_id=project_id,
        type=type_,
        title=title,
        description=data.get("description"),
        task_id=data.get("task_id"),
        prompt_id=data.get("prompt_id"),
        metadata=data.get("metadata"),
    )
    db.add(activity)
    try:
        db.commit()
        db.refresh(activity)
        logger.info(f"Logged activity '{activity.type}' for project {activity.project_id}")
        return activity
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create activity: {e}")
        raise

def log_activity_safely(db: Session, **fields) -> Optional[Activity]:
    """
    Записывает активность отдельной транзакцией. Ошибка только логируется:
    основная операция к этому моменту уже сохранена.
    """
    activity = build_activity(**fields)
    db.add(activity)
    try:
        db.commit()
        return activity
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to log activity '{fields.get('type')}': {e}")
        return None

def get_project_activities(
    db: Session, project_id: str, limit: int = 10, offset: int = 0
) -> Tuple[List[Activity], int, bool]:
    """
    Страница ленты активности (новые сверху): (записи, всего, есть ли ещё).
    """
    query = db.query(Activity).filter(Activity.project_id == project_id)
    total = query.count()
    activities = (
        query.order_by(Activity.created_at.desc())
        .offset(offset)
        .limit(limit)
        .all()
    )
    return activities, total, offset + len(activities) < total
