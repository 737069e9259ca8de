# vibepm/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

class CamelModel(BaseModel):
    """
    CamelModel — базовая схема API: snake_case в Python, camelCase в JSON (projectId, mvpDefinition, ...).
    Принимает оба варианта имён на входе, читает атрибуты ORM-объектов.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
