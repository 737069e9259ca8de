# vibepm/crud/step.py
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.step import Step
from vibepm.models.task import Task
from vibepm.core.exceptions import StepNotFound, StepValidationError, TaskNotFound

logger = logging.getLogger("VibePM.Steps")

def create_step(db: Session, data: dict) -> Step:
    """
    Добавляет шаг в конец чек-листа задачи.
    """
    task_id = data.get("task_id")
    if not task_id:
        raise StepValidationError("Task ID is required")
    title = (data.get("title") or "").strip()
    if not title:
        raise StepValidationError("Title is required")
    if db.get(Task, task_id) is None:
        raise TaskNotFound()

    max_order = db.query(func.max(Step.order)).filter(Step.task_id == task_id).scalar()
    step = Step(
        task_id=task_id,
        title=title,
        order=0 if max_order is None else max_order + 1,
    )
    db.add(step)
    try:
        db.commit()
        db.refresh(step)
        logger.info(f"Created step {step.id} for task {task_id}")
        return step
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create step: {e}")
        raise

def get_step(db: Session, step_id: str) -> Step:
    step = db.get(Step, step_id)
    if not step:
        raise StepNotFound()
    return step

def update_step(db: Session, step_id: str, data: dict) -> Step:
    step = get_step(db, step_id)
    if "title" in data and data["title"] is not None:
        title = data["title"].strip()
        if not title:
            raise StepValidationError("Title cannot be empty")
        step.title = title
    if data.get("completed") is not None:
        step.completed = bool(data["completed"])
    if data.get("order") is not None:
        step.order = data["order"]
    try:
        db.commit()
        db.refresh(step)
        logger.info(f"Updated step {step.id}")
        return step
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update step: {e}")
        raise

def delete_step(db: Session, step_id: str) -> None:
    step = get_step(db, step_id)
    try:
        db.delete(step)
        db.commit()
        logger.info(f"Deleted step {step_id}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete step: {e}")
        raise
