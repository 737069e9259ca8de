# vibepm/schemas/task.py
from pydantic import Field
from typing import Optional, List
from datetime import datetime

from vibepm.schemas.base import CamelModel

class TaskCreate(CamelModel):
    """
    TaskCreate — создание задачи. projectId и title проверяются в CRUD.
    """
    project_id: Optional[str] = Field(None, examples=["p1"], description="ID проекта")
    title: Optional[str] = Field(None, examples=["Build login"], description="Название задачи")
    description: Optional[str] = None
    complexity: Optional[str] = Field(None, description="SMALL, MEDIUM, LARGE, EXTRA_LARGE")
    status: Optional[str] = Field(None, description="TODO, IN_PROGRESS, BLOCKED, COMPLETED, CANCELLED")
    phase_id: Optional[str] = None

class TaskUpdate(CamelModel):
    """
    TaskUpdate — частичное обновление задачи.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    complexity: Optional[str] = None
    status: Optional[str] = None
    order: Optional[int] = None
    phase_id: Optional[str] = None

class StepRead(CamelModel):
    id: str
    task_id: str
    title: str
    completed: bool
    order: int
    created_at: datetime

class StepCreate(CamelModel):
    task_id: Optional[str] = None
    title: Optional[str] = None

class StepUpdate(CamelModel):
    title: Optional[str] = None
    completed: Optional[bool] = None
    order: Optional[int] = None

class TaskRead(CamelModel):
    """
    TaskRead — задача в ответах API.
    """
    id: str
    project_id: str
    phase_id: Optional[str] = None
    title: str
    description: Optional[str] = None
    complexity: str
    status: str
    order: int
    created_at: datetime
    updated_at: datetime

class TaskPromptSummary(CamelModel):
    id: str
    title: str
    content: str
    outcome: Optional[str] = None
    created_at: datetime

class TaskDetail(TaskRead):
    """
    TaskDetail — задача с шагами и промптами.
    """
    steps: List[StepRead] = Field(default_factory=list)
    prompts: List[TaskPromptSummary] = Field(default_factory=list)
