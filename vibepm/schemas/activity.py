# vibepm/schemas/activity.py
from pydantic import AliasChoices, Field
from typing import Optional, Any, List
from datetime import datetime

from vibepm.schemas.base import CamelModel

class ActivityCreate(CamelModel):
    """
    ActivityCreate — запись в журнал. metadata сериализуется в JSON-строку при сохранении.
    """
    project_id: Optional[str] = None
    type: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    task_id: Optional[str] = None
    prompt_id: Optional[str] = None
    metadata: Optional[Any] = None

class ActivityRead(CamelModel):
    id: str
    project_id: str
    type: str
    title: str
    description: Optional[str] = None
    task_id: Optional[str] = None
    prompt_id: Optional[str] = None
    metadata_json: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("metadata_json", "metadata"),
        serialization_alias="metadata",
    )
    created_at: datetime

class ActivityPage(CamelModel):
    """
    ActivityPage — страница ленты активности.
    """
    activities: List[ActivityRead]
    total: int
    has_more: bool
