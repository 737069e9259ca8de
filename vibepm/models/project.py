# vibepm/models/project.py
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, Index
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

PROJECT_STATUSES = ("PLANNING", "ACTIVE", "PAUSED", "COMPLETED", "ARCHIVED")

class Project(Base):
    """
    Project — основная единица планирования: идея, превращённая в проект с описанием проблемы и MVP.
    Поддерживает soft-delete через deleted_at.
    """
    __tablename__ = "projects"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    slug: str = Column(String(160), unique=True, nullable=False, index=True, doc="URL-идентификатор, уникальный")
    name: str = Column(String(160), nullable=False, doc="Название проекта")
    problem: str = Column(Text, nullable=True, doc="Описание решаемой проблемы")
    mvp_definition: str = Column(Text, nullable=True, doc="Определение MVP (MoSCoW)")
    status: str = Column(String(16), nullable=False, default="PLANNING", index=True, doc="PLANNING, ACTIVE, PAUSED, COMPLETED, ARCHIVED")
    deleted_at: datetime = Column(DateTime(timezone=True), nullable=True, index=True, doc="Дата soft-delete")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False, doc="Дата изменения")

    tasks = relationship("Task", back_populates="project", cascade="all, delete", order_by="Task.order")
    prompts = relationship("Prompt", back_populates="project", cascade="all, delete", order_by="Prompt.created_at.desc()")
    phases = relationship("Phase", back_populates="project", cascade="all, delete", order_by="Phase.order")
    decisions = relationship("Decision", back_populates="project", cascade="all, delete", order_by="Decision.created_at.desc()")
    activities = relationship("Activity", back_populates="project", cascade="all, delete")
    context_doc = relationship("ContextDocument", back_populates="project", uselist=False, cascade="all, delete")
    quick_captures = relationship("QuickCapture", back_populates="project")

    __table_args__ = (
        Index("ix_projects_updated_at", "updated_at"),
    )

    def __repr__(self):
        return f"<Project(id={self.id}, slug='{self.slug}', status='{self.status}')>"
