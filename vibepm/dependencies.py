# vibepm/dependencies.py

from typing import Generator
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from vibepm.database import SessionLocal
from vibepm.models.project import Project as ProjectModel
from vibepm.crud.project import get_project_by_slug
from vibepm.core.exceptions import ProjectNotFound

def get_db() -> Generator[Session, None, None]:
    """
    Создает и возвращает сессию базы данных, гарантирует закрытие после использования.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_project_or_404(slug: str, db: Session = Depends(get_db)) -> ProjectModel:
    """
    Получить проект по slug, иначе выдать 404.
    """
    try:
        return get_project_by_slug(db, slug)
    except ProjectNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
