# vibepm/crud/task.py
import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.task import Task, TASK_STATUSES, TASK_COMPLEXITIES
from vibepm.models.project import Project
from vibepm.models.phase import Phase
from vibepm.core.exceptions import TaskNotFound, TaskValidationError, ProjectNotFound
from vibepm.crud.activity import build_activity, log_activity_safely

logger = logging.getLogger("VibePM.Tasks")

STATUS_LABELS = {
    "TODO": "To Do",
    "IN_PROGRESS": "In Progress",
    "BLOCKED": "Blocked",
    "COMPLETED": "Done",
    "CANCELLED": "Cancelled",
}

def _validate_enum(value: str, allowed, field: str) -> str:
    if value not in allowed:
        raise TaskValidationError(f"Invalid {field}: {value}. Allowed: {', '.join(allowed)}")
    return value

def _validate_phase(db: Session, phase_id: Optional[str], project_id: str) -> Optional[str]:
    if not phase_id:
        return None
    phase = db.get(Phase, phase_id)
    if phase is None or phase.project_id != project_id:
        raise TaskValidationError("Phase does not belong to this project")
    return phase_id

def next_task_order(db: Session, project_id: str) -> int:
    """
    max(order) + 1 внутри проекта (0 для первой задачи).
    """
    max_order = db.query(func.max(Task.order)).filter(Task.project_id == project_id).scalar()
    return 0 if max_order is None else max_order + 1

def create_task(db: Session, data: dict, default_complexity: str = "MEDIUM") -> Task:
    """
    Создаёт задачу в конце списка проекта и пишет в журнал task_created.
    """
    project_id = data.get("project_id")
    if not project_id:
        raise TaskValidationError("Project ID is required")
    title = (data.get("title") or "").strip()
    if not title:
        raise TaskValidationError("Title is required")
    if db.get(Project, project_id) is None:
        raise ProjectNotFound()

    complexity = _validate_enum(data.get("complexity") or default_complexity, TASK_COMPLEXITIES, "complexity")
    status = _validate_enum(data.get("status") or "TODO", TASK_STATUSES, "status")
    description = (data.get("description") or "").strip() or None

    task = Task(
        project_id=project_id,
        phase_id=_validate_phase(db, data.get("phase_id"), project_id),
        title=title,
        description=description,
        complexity=complexity,
        status=status,
        order=next_task_order(db, project_id),
    )
    db.add(task)
    try:
        db.flush()
        db.add(build_activity(
            project_id=project_id,
            type="task_created",
            title=f'Created task "{task.title}"',
            task_id=task.id,
        ))
        db.commit()
        db.refresh(task)
        logger.info(f"Created task {task.id} for project {task.project_id} (order {task.order})")
        return task
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create task: {e}")
        raise

def get_task(db: Session, task_id: str) -> Task:
    task = db.get(Task, task_id)
    if not task:
        raise TaskNotFound()
    return task

def update_task(db: Session, task_id: str, data: dict) -> Task:
    """
    Частичное обновление задачи. Смена статуса пишется в журнал task_status_changed
    после сохранения задачи; сбой журнала не отменяет изменение.
    """
    task = get_task(db, task_id)
    old_status = task.status
    old_title = task.title

    changes = {}
    if "title" in data and data["title"] is not None:
        title = data["title"].strip()
        if not title:
            raise TaskValidationError("Title cannot be empty")
        changes["title"] = title
    if "description" in data:
        changes["description"] = (data["description"] or "").strip() or None
    if data.get("complexity") is not None:
        changes["complexity"] = _validate_enum(data["complexity"], TASK_COMPLEXITIES, "complexity")
    if data.get("status") is not None:
        changes["status"] = _validate_enum(data["status"], TASK_STATUSES, "status")
    if data.get("order") is not None:
        changes["order"] = data["order"]
    if "phase_id" in data:
        changes["phase_id"] = _validate_phase(db, data["phase_id"], task.project_id)

    for field, value in changes.items():
        setattr(task, field, value)

    try:
        db.commit()
        db.refresh(task)
        logger.info(f"Updated task {task.id} fields: {sorted(changes.keys())}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update task: {e}")
        raise

    if task.status != old_status:
        log_activity_safely(
            db,
            project_id=task.project_id,
            type="task_status_changed",
            title=f'Moved "{old_title}" to {STATUS_LABELS.get(task.status, task.status)}',
            task_id=task.id,
            metadata={"oldStatus": old_status, "newStatus": task.status},
        )
    return task

def delete_task(db: Session, task_id: str) -> None:
    """
    Удаляет задачу вместе с шагами и промптами.
    """
    task = get_task(db, task_id)
    try:
        db.delete(task)
        db.commit()
        logger.info(f"Deleted task {task_id}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete task: {e}")
        raise
