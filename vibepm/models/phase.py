# vibepm/models/phase.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

class Phase(Base):
    """
    Phase — этап проекта, группирующий задачи.
    """
    __tablename__ = "phases"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    project_id: str = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    name: str = Column(String(160), nullable=False)
    order: int = Column(Integer, nullable=False, default=0)
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    project = relationship("Project", back_populates="phases")
    tasks = relationship("Task", back_populates="phase", order_by="Task.order")


class Decision(Base):
    """
    Decision — зафиксированное проектное решение.
    """
    __tablename__ = "decisions"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    project_id: str = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    title: str = Column(String(255), nullable=False)
    rationale: str = Column(Text, nullable=True)
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    project = relationship("Project", back_populates="decisions")
