# vibepm/schemas/data.py
from pydantic import Field
from typing import Any, List, Optional
from datetime import datetime

from vibepm.schemas.base import CamelModel
from vibepm.schemas.activity import ActivityRead
from vibepm.schemas.project import ProjectRead, PhaseRead, DecisionRead
from vibepm.schemas.prompt import PromptRead
from vibepm.schemas.task import TaskRead

class ExportProject(ProjectRead):
    tasks: List[TaskRead] = Field(default_factory=list)
    prompts: List[PromptRead] = Field(default_factory=list)
    phases: List[PhaseRead] = Field(default_factory=list)
    decisions: List[DecisionRead] = Field(default_factory=list)

class ExportCapture(CamelModel):
    id: str
    content: str
    project_id: Optional[str] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

class SettingRow(CamelModel):
    key: str
    value: Any
    created_at: datetime
    updated_at: datetime

class ExportData(CamelModel):
    projects: List[ExportProject]
    tasks: List[TaskRead]
    prompts: List[PromptRead]
    phases: List[PhaseRead]
    decisions: List[DecisionRead]
    quick_captures: List[ExportCapture]
    activities: List[ActivityRead]
    settings: List[SettingRow]

class ExportDocument(CamelModel):
    """
    ExportDocument — полный снимок данных: {exportedAt, version, data}.
    """
    exported_at: datetime
    version: str
    data: ExportData

class PurgeResult(CamelModel):
    success: bool = True
    projects: int
    quick_captures: int
    retention_days: int
