# vibepm/models/activity.py
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Index
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

class Activity(Base):
    """
    Activity — append-only журнал событий проекта (task_created, task_status_changed, prompt_generated, ...).
    """
    __tablename__ = "activities"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    project_id: str = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True)
    type: str = Column(String(64), nullable=False, doc="Тип события (свободный тег)")
    title: str = Column(String(512), nullable=False)
    description: str = Column(Text, nullable=True)
    task_id: str = Column(String(32), nullable=True, doc="ID задачи (без FK: журнал переживает удаление задачи)")
    prompt_id: str = Column(String(32), nullable=True, doc="ID промпта")
    # имя metadata занято в declarative Base
    metadata_json: str = Column("metadata", Text, nullable=True, doc="Сериализованный JSON")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    project = relationship("Project", back_populates="activities")

    __table_args__ = (
        Index("ix_activities_project_created", "project_id", "created_at"),
    )

    def __repr__(self):
        return f"<Activity(id={self.id}, type='{self.type}', project_id={self.project_id})>"
