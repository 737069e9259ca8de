# vibepm/schemas/board.py
from typing import List, Literal, Optional

from vibepm.schemas.base import CamelModel
from vibepm.services.insights import InsightType
from vibepm.services.kanban import Lane

class TaskCardRead(CamelModel):
    task_id: str
    title: str
    status: str
    complexity: str
    description: Optional[str] = None

class PromptCardRead(CamelModel):
    prompt_id: str
    task_id: str
    title: str
    content: str
    complexity: Optional[str] = None
    outcome: Optional[str] = None

class BoardRead(CamelModel):
    """
    BoardRead — канбан-доска проекта: четыре колонки карточек.
    """
    todo: List[TaskCardRead]
    prompts: List[PromptCardRead]
    in_progress: List[TaskCardRead]
    done: List[TaskCardRead]

class DraggedItemIn(CamelModel):
    type: Literal["task", "prompt"]
    id: str

class BoardDropRequest(CamelModel):
    """
    BoardDropRequest — бросок карточки в колонку: {"item": {"type": "task", "id": "..."}, "lane": "prompts"}.
    """
    item: Optional[DraggedItemIn] = None
    lane: Lane

class InsightRead(CamelModel):
    """
    InsightRead — подсказка по состоянию проекта (пустой бэклог, зависшие задачи и т.п.).
    """
    id: str
    type: InsightType
    title: str
    description: str
