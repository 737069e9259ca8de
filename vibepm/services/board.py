# vibepm/services/board.py
"""
Канбан-доска поверх БД: загрузка карточек и выполнение действий броска
теми же CRUD-функциями, что и REST-роуты.
"""
import logging
from typing import Optional

import httpx
from sqlalchemy.orm import Session

from vibepm.core.exceptions import BoardDropRejected, PromptNotFound, TaskNotFound
from vibepm.crud.prompt import get_prompt, delete_prompt
from vibepm.crud.task import get_task, update_task
from vibepm.models.project import Project
from vibepm.services.kanban import (
    Board, Lane, DraggedItem, DraggedTask, DraggedPrompt,
    UpdateTaskStatus, DeletePrompt, GeneratePrompt,
    build_board, plan_drop,
)
from vibepm.services.prompt_generation import generate_prompt_for_task

logger = logging.getLogger("VibePM.Board")

def load_board(project: Project) -> Board:
    return build_board(project.tasks, project.prompts)

def resolve_dragged_item(db: Session, project: Project, item_type: str, item_id: str) -> DraggedItem:
    """
    Превращает {type, id} из запроса в DraggedTask/DraggedPrompt по текущему состоянию БД.
    """
    if item_type == "task":
        task = get_task(db, item_id)
        if task.project_id != project.id:
            raise TaskNotFound()
        return DraggedTask(task_id=task.id, status=task.status)

    prompt = get_prompt(db, item_id)
    if prompt.project_id != project.id:
        raise PromptNotFound()
    if prompt.task is None:
        raise BoardDropRejected("Prompt is not linked to a task")
    return DraggedPrompt(prompt_id=prompt.id, task_id=prompt.task.id, task_status=prompt.task.status)

async def apply_drop(
    db: Session,
    project: Project,
    item_type: str,
    item_id: str,
    lane: Lane,
    client: Optional[httpx.AsyncClient] = None,
) -> Board:
    """
    Проверяет бросок, выполняет запланированные действия и возвращает обновлённую доску.
    """
    item = resolve_dragged_item(db, project, item_type, item_id)
    actions = plan_drop(item, lane, load_board(project), project.id)
    logger.info(f"Drop {item_type} {item_id} into '{Lane(lane).value}' on {project.slug}: {len(actions)} action(s)")

    for action in actions:
        if isinstance(action, UpdateTaskStatus):
            update_task(db, action.task_id, {"status": action.status})
        elif isinstance(action, DeletePrompt):
            delete_prompt(db, action.prompt_id)
        elif isinstance(action, GeneratePrompt):
            await generate_prompt_for_task(db, action.task_id, action.project_id, client=client)

    db.expire_all()
    return load_board(project)
