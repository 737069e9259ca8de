# vibepm/schemas/project.py
from pydantic import AliasChoices, Field
from typing import Optional, List
from datetime import datetime

from vibepm.schemas.base import CamelModel
from vibepm.schemas.task import TaskRead
from vibepm.schemas.prompt import PromptRead

class ProjectCreate(CamelModel):
    """
    ProjectCreate — создание проекта. Обязательность name проверяется в CRUD (400, а не 422).
    """
    name: Optional[str] = Field(None, examples=["Habit Tracker"], description="Название проекта")
    problem: Optional[str] = Field(None, description="Какую проблему решает проект")
    mvp_definition: Optional[str] = Field(None, description="Определение MVP")

class ProjectUpdate(CamelModel):
    """
    ProjectUpdate — частичное обновление (учитываются только переданные поля).
    """
    name: Optional[str] = None
    problem: Optional[str] = None
    mvp_definition: Optional[str] = None
    status: Optional[str] = None

class ProjectCounts(CamelModel):
    tasks: int = 0
    prompts: int = 0

class ProjectRead(CamelModel):
    """
    ProjectRead — проект в ответах API.
    """
    id: str
    slug: str
    name: str
    problem: Optional[str] = None
    mvp_definition: Optional[str] = None
    status: str
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

class ProjectListItem(ProjectRead):
    """
    ProjectListItem — элемент списка проектов с количеством задач и промптов.
    """
    count: ProjectCounts = Field(
        default_factory=ProjectCounts,
        validation_alias=AliasChoices("count", "_count"),
        serialization_alias="_count",
    )

class PhaseRead(CamelModel):
    id: str
    project_id: str
    name: str
    order: int
    created_at: datetime

class DecisionRead(CamelModel):
    id: str
    project_id: str
    title: str
    rationale: Optional[str] = None
    created_at: datetime

class ContextDocumentRead(CamelModel):
    """
    ContextDocumentRead — markdown-контекст проекта для AI-ассистента.
    """
    project_id: str
    content: str
    last_generated: datetime

class ProjectDetail(ProjectListItem):
    """
    ProjectDetail — проект со всеми вложенными сущностями (страница проекта).
    """
    tasks: List[TaskRead] = Field(default_factory=list)
    prompts: List[PromptRead] = Field(default_factory=list)
    phases: List[PhaseRead] = Field(default_factory=list)
    decisions: List[DecisionRead] = Field(default_factory=list)
    context_doc: Optional[ContextDocumentRead] = None

class GenerateNameRequest(CamelModel):
    current_name: Optional[str] = ""
    problem: Optional[str] = None

class GenerateNameResponse(CamelModel):
    name: str
