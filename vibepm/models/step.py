# vibepm/models/step.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

class Step(Base):
    """
    Step — пункт чек-листа задачи.
    """
    __tablename__ = "steps"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    task_id: str = Column(String(32), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    title: str = Column(String(255), nullable=False)
    completed: bool = Column(Boolean, nullable=False, default=False)
    order: int = Column(Integer, nullable=False, default=0)
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    task = relationship("Task", back_populates="steps")

    def __repr__(self):
        return f"<Step(id={self.id}, task_id={self.task_id}, order={self.order}, completed={self.completed})>"
