# vibepm/schemas/ai.py
from pydantic import Field
from typing import Optional, List

from vibepm.schemas.base import CamelModel

class AnalyzeItem(CamelModel):
    id: str
    content: str

class AnalyzeRequest(CamelModel):
    """
    AnalyzeRequest — пакет идей для AI-анализа (пустой пакет отклоняется с 400 в роутере).
    """
    items: Optional[List[AnalyzeItem]] = None

class AnalyzeResponse(CamelModel):
    original_items: List[AnalyzeItem]
    analysis: str

class UserAnswer(CamelModel):
    question: str
    answer: str

class ClarifyingQuestion(CamelModel):
    id: str
    question: str
    hint: str = ""

class SuggestionsRequest(CamelModel):
    capture_id: Optional[str] = None
    content: Optional[str] = None
    analysis: Optional[str] = None
    user_answers: Optional[List[UserAnswer]] = None

class ProjectSuggestions(CamelModel):
    """
    ProjectSuggestions — структурированные предложения для превращения идеи в проект.
    """
    suggested_name: str
    suggested_problem: str
    suggested_mvp: str
    clarifying_questions: List[ClarifyingQuestion] = Field(default_factory=list)
