# vibepm/schemas/response.py
from pydantic import BaseModel

class SuccessResponse(BaseModel):
    """
    SuccessResponse — ответ на удаление/массовые операции: {"success": true}.
    """
    success: bool = True
