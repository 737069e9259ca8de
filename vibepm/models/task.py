# vibepm/models/task.py
from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

TASK_STATUSES = ("TODO", "IN_PROGRESS", "BLOCKED", "COMPLETED", "CANCELLED")
TASK_COMPLEXITIES = ("SMALL", "MEDIUM", "LARGE", "EXTRA_LARGE")

class Task(Base):
    """
    Task — задача проекта. Порядок (order) выдаётся как max(order) + 1 внутри проекта.
    """
    __tablename__ = "tasks"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    project_id: str = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True, doc="ID проекта")
    phase_id: str = Column(String(32), ForeignKey("phases.id", ondelete="SET NULL"), nullable=True, index=True, doc="ID фазы")
    title: str = Column(String(255), nullable=False, doc="Название задачи")
    description: str = Column(Text, nullable=True, doc="Описание")
    complexity: str = Column(String(16), nullable=False, default="MEDIUM", doc="SMALL, MEDIUM, LARGE, EXTRA_LARGE")
    status: str = Column(String(16), nullable=False, default="TODO", doc="TODO, IN_PROGRESS, BLOCKED, COMPLETED, CANCELLED")
    order: int = Column(Integer, nullable=False, default=0, doc="Порядок внутри проекта")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False, doc="Дата изменения")

    project = relationship("Project", back_populates="tasks")
    phase = relationship("Phase", back_populates="tasks")
    steps = relationship("Step", back_populates="task", cascade="all, delete", order_by="Step.order")
    prompts = relationship("Prompt", back_populates="task", cascade="all, delete")

    __table_args__ = (
        Index("ix_tasks_status", "status"),
        Index("ix_tasks_project_order", "project_id", "order"),
    )

    def __repr__(self):
        return f"<Task(id={self.id}, title='{self.title}', status={self.status}, project_id={self.project_id})>"
