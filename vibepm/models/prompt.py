# vibepm/models/prompt.py
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

PROMPT_OUTCOMES = ("WORKED", "PARTIAL", "FAILED")

class Prompt(Base):
    """
    Prompt — промпт для AI-ассистента (сгенерированный или ручной), опционально привязанный к задаче.
    """
    __tablename__ = "prompts"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    project_id: str = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    task_id: str = Column(String(32), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True, index=True, doc="Связанная задача")
    title: str = Column(String(255), nullable=False)
    content: str = Column(Text, nullable=False)
    outcome: str = Column(String(16), nullable=True, doc="WORKED, PARTIAL, FAILED")
    notes: str = Column(Text, nullable=True)
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    project = relationship("Project", back_populates="prompts")
    task = relationship("Task", back_populates="prompts")

    def __repr__(self):
        return f"<Prompt(id={self.id}, task_id={self.task_id}, outcome={self.outcome})>"
