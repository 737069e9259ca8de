# vibepm/schemas/quick_capture.py
from typing import Optional
from datetime import datetime

from vibepm.schemas.base import CamelModel

class CaptureCreate(CamelModel):
    content: Optional[str] = None
    analysis: Optional[str] = None
    project_id: Optional[str] = None

class CaptureUpdate(CamelModel):
    """
    CaptureUpdate — частичное обновление: текст, анализ и/или привязка к проекту.
    """
    content: Optional[str] = None
    analysis: Optional[str] = None
    project_id: Optional[str] = None

class CaptureProject(CamelModel):
    id: str
    name: str
    slug: str

class CaptureRead(CamelModel):
    """
    CaptureRead — идея из Quick Capture вместе с AI-анализом (если он есть).
    """
    id: str
    content: str
    analysis: Optional[str] = None
    project_id: Optional[str] = None
    project: Optional[CaptureProject] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
