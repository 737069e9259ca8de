# vibepm/models/quick_capture.py
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

class QuickCapture(Base):
    """
    QuickCapture — черновик идеи. Исходный текст и AI-анализ хранятся в разных колонках;
    после «повышения» в проект заполняется project_id.
    """
    __tablename__ = "quick_captures"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    content: str = Column(Text, nullable=False, doc="Исходный текст идеи")
    analysis: str = Column(Text, nullable=True, doc="AI-анализ идеи")
    project_id: str = Column(String(32), ForeignKey("projects.id", ondelete="SET NULL"), nullable=True, index=True)
    deleted_at: datetime = Column(DateTime(timezone=True), nullable=True, index=True, doc="Дата soft-delete")
    created_at: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    project = relationship("Project", back_populates="quick_captures")

    def __repr__(self):
        return f"<QuickCapture(id={self.id}, project_id={self.project_id}, deleted={self.deleted_at is not None})>"
