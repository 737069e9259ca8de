# vibepm/models/context_document.py
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from vibepm.models.base import Base, generate_id, utcnow

class ContextDocument(Base):
    """
    ContextDocument — markdown-сводка проекта для AI-ассистентов. Производные данные,
    в любой момент перегенерируется из Project + Task.
    """
    __tablename__ = "context_documents"

    id: str = Column(String(32), primary_key=True, default=generate_id)
    project_id: str = Column(String(32), ForeignKey("projects.id", ondelete="CASCADE"), unique=True, nullable=False)
    content: str = Column(Text, nullable=False)
    last_generated: datetime = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    project = relationship("Project", back_populates="context_doc")

    def __repr__(self):
        return f"<ContextDocument(project_id={self.project_id}, last_generated={self.last_generated})>"
