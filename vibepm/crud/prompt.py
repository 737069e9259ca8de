# vibepm/crud/prompt.py
import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.prompt import Prompt, PROMPT_OUTCOMES
from vibepm.models.project import Project
from vibepm.models.task import Task
from vibepm.core.exceptions import PromptNotFound, PromptValidationError, ProjectNotFound, TaskNotFound
from vibepm.crud.activity import build_activity

logger = logging.getLogger("VibePM.Prompts")

def _validate_outcome(outcome: Optional[str]) -> Optional[str]:
    if not outcome:
        return None
    if outcome not in PROMPT_OUTCOMES:
        raise PromptValidationError(f"Invalid outcome: {outcome}. Allowed: {', '.join(PROMPT_OUTCOMES)}")
    return outcome

def create_prompt(db: Session, data: dict) -> Prompt:
    """
    Ручное создание промпта (задача опциональна).
    """
    project_id = data.get("project_id")
    if not project_id:
        raise PromptValidationError("Project ID is required")
    title = (data.get("title") or "").strip()
    if not title:
        raise PromptValidationError("Title is required")
    content = (data.get("content") or "").strip()
    if not content:
        raise PromptValidationError("Content is required")
    if db.get(Project, project_id) is None:
        raise ProjectNotFound()
    task_id = data.get("task_id") or None
    if task_id is not None and db.get(Task, task_id) is None:
        raise TaskNotFound()

    prompt = Prompt(
        project_id=project_id,
        task_id=task_id,
        title=title,
        content=content,
        outcome=_validate_outcome(data.get("outcome")),
        notes=(data.get("notes") or "").strip() or None,
    )
    db.add(prompt)
    try:
        db.commit()
        db.refresh(prompt)
        logger.info(f"Created prompt {prompt.id} for project {project_id}")
        return prompt
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create prompt: {e}")
        raise

def get_prompt(db: Session, prompt_id: str) -> Prompt:
    prompt = db.get(Prompt, prompt_id)
    if not prompt:
        raise PromptNotFound()
    return prompt

def find_prompt_for_task(db: Session, task_id: str) -> Optional[Prompt]:
    """
    Самый ранний промпт задачи или None.
    """
    return (
        db.query(Prompt)
        .filter(Prompt.task_id == task_id)
        .order_by(Prompt.created_at.asc())
        .first()
    )

def create_generated_prompt(db: Session, task: Task, project_id: str, content: str) -> Tuple[Prompt, bool]:
    """
    Сохраняет AI-промпт для задачи и запись prompt_generated одной транзакцией.

    Если у задачи уже появился промпт (параллельный запрос успел раньше),
    возвращает его: (prompt, False). Иначе (новый prompt, True).
    """
    existing = find_prompt_for_task(db, task.id)
    if existing is not None:
        logger.info(f"Task {task.id} already has prompt {existing.id}, skipping insert")
        return existing, False

    prompt = Prompt(
        project_id=project_id,
        task_id=task.id,
        title=f"Prompt for: {task.title}",
        content=content,
    )
    db.add(prompt)
    try:
        db.flush()
        db.add(build_activity(
            project_id=project_id,
            type="prompt_generated",
            title=f'Generated prompt for "{task.title}"',
            task_id=task.id,
            prompt_id=prompt.id,
        ))
        db.commit()
        db.refresh(prompt)
        logger.info(f"Generated prompt {prompt.id} for task {task.id}")
        return prompt, True
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to save generated prompt: {e}")
        raise

def update_prompt(db: Session, prompt_id: str, data: dict) -> Prompt:
    prompt = get_prompt(db, prompt_id)

    changes = {}
    if "title" in data and data["title"] is not None:
        title = data["title"].strip()
        if not title:
            raise PromptValidationError("Title cannot be empty")
        changes["title"] = title
    if "content" in data and data["content"] is not None:
        content = data["content"].strip()
        if not content:
            raise PromptValidationError("Content cannot be empty")
        changes["content"] = content
    if "outcome" in data:
        changes["outcome"] = _validate_outcome(data["outcome"])
    if "notes" in data:
        changes["notes"] = (data["notes"] or "").strip() or None

    for field, value in changes.items():
        setattr(prompt, field, value)
    try:
        db.commit()
        db.refresh(prompt)
        logger.info(f"Updated prompt {prompt.id} fields: {sorted(changes.keys())}")
        return prompt
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update prompt: {e}")
        raise

def delete_prompt(db: Session, prompt_id: str) -> None:
    prompt = get_prompt(db, prompt_id)
    try:
        db.delete(prompt)
        db.commit()
        logger.info(f"Deleted prompt {prompt_id}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete prompt: {e}")
        raise
