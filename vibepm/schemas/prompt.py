# vibepm/schemas/prompt.py
from pydantic import Field
from typing import Optional
from datetime import datetime

from vibepm.schemas.base import CamelModel

class PromptCreate(CamelModel):
    """
    PromptCreate — ручное создание промпта.
    """
    project_id: Optional[str] = None
    task_id: Optional[str] = None
    title: Optional[str] = None
    content: Optional[str] = None
    outcome: Optional[str] = Field(None, description="WORKED, PARTIAL, FAILED")
    notes: Optional[str] = None

class PromptUpdate(CamelModel):
    title: Optional[str] = None
    content: Optional[str] = None
    outcome: Optional[str] = None
    notes: Optional[str] = None

class PromptRead(CamelModel):
    id: str
    project_id: str
    task_id: Optional[str] = None
    title: str
    content: str
    outcome: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime

class PromptTaskSummary(CamelModel):
    id: str
    title: str
    complexity: str
    status: str

class PromptDetail(PromptRead):
    task: Optional[PromptTaskSummary] = None

class GeneratePromptRequest(CamelModel):
    task_id: Optional[str] = None
    project_id: Optional[str] = None
