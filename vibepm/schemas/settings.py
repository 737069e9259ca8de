# vibepm/schemas/settings.py
from pydantic import Field, field_validator
from typing import Literal

from vibepm.schemas.base import CamelModel

class Preferences(CamelModel):
    """
    Preferences — типизированный вид key/value настроек с дефолтами.
    Приведение типов выполняется при чтении, поэтому в таблице могут лежать старые/лишние ключи.
    """
    theme: Literal["light", "dark", "system"] = "system"
    compact_mode: bool = False
    default_project_view: str = "kanban"
    default_ai_model: str = "gpt-4o"
    auto_generate_prompts: bool = False
    default_task_complexity: Literal["SMALL", "MEDIUM", "LARGE", "EXTRA_LARGE"] = "MEDIUM"
    soft_delete_retention_days: int = Field(30, ge=0)

    @field_validator("default_ai_model")
    @classmethod
    def model_not_empty(cls, v: str) -> str:
        return v.strip() or "gpt-4o"
