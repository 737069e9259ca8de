# vibepm/crud/project.py
import re
import logging
from typing import Optional, List, Dict, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from vibepm.models.base import utcnow
from vibepm.models.project import Project, PROJECT_STATUSES
from vibepm.models.task import Task
from vibepm.models.prompt import Prompt
from vibepm.models.context_document import ContextDocument
from vibepm.core.exceptions import ProjectNotFound, ProjectValidationError
from vibepm.services.context_document import build_initial_context, build_context_document

logger = logging.getLogger("VibePM.Projects")

def slugify(name: str) -> str:
    """
    'My Cool App!' -> 'my-cool-app'
    """
    slug = re.sub(r"[^a-z0-9]+", "-", name.lower())
    return slug.strip("-") or "project"

def generate_unique_slug(db: Session, name: str) -> str:
    """
    Уникальный slug: base, base-1, base-2, ...
    """
    base = slugify(name)
    slug = base
    counter = 1
    while db.query(Project.id).filter(Project.slug == slug).first() is not None:
        slug = f"{base}-{counter}"
        counter += 1
    return slug

def _clean_optional(value: Optional[str]) -> Optional[str]:
    """Пустая/пробельная строка сохраняется как NULL."""
    if value is None:
        return None
    value = value.strip()
    return value or None

def create_project(db: Session, data: dict) -> Project:
    """
    Создаёт проект (статус PLANNING, уникальный slug) вместе с начальным контекст-документом.
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ProjectValidationError("Project name is required")

    problem = _clean_optional(data.get("problem"))
    mvp_definition = _clean_optional(data.get("mvp_definition"))
    project = Project(
        slug=generate_unique_slug(db, name),
        name=name,
        problem=problem,
        mvp_definition=mvp_definition,
        status="PLANNING",
    )
    project.context_doc = ContextDocument(content=build_initial_context(name, problem, mvp_definition))
    db.add(project)
    try:
        db.commit()
        db.refresh(project)
        logger.info(f"Created project '{project.name}' (slug: {project.slug})")
        return project
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to create project: {e}")
        raise

def get_project_counts(db: Session, project_ids: List[str]) -> Dict[str, Dict[str, int]]:
    """
    {project_id: {"tasks": n, "prompts": m}} одним запросом на сущность.
    """
    counts = {pid: {"tasks": 0, "prompts": 0} for pid in project_ids}
    if not project_ids:
        return counts
    for model, key in ((Task, "tasks"), (Prompt, "prompts")):
        rows = (
            db.query(model.project_id, func.count(model.id))
            .filter(model.project_id.in_(project_ids))
            .group_by(model.project_id)
            .all()
        )
        for project_id, count in rows:
            counts[project_id][key] = count
    return counts

def get_all_projects(db: Session, deleted: bool = False) -> List[Tuple[Project, Dict[str, int]]]:
    """
    Активные проекты (новые изменения сверху) или корзина (недавно удалённые сверху), со счётчиками.
    """
    query = db.query(Project)
    if deleted:
        query = query.filter(Project.deleted_at.isnot(None)).order_by(Project.deleted_at.desc())
    else:
        query = query.filter(Project.deleted_at.is_(None)).order_by(Project.updated_at.desc())
    projects = query.all()
    counts = get_project_counts(db, [p.id for p in projects])
    return [(project, counts[project.id]) for project in projects]

def get_project_by_slug(db: Session, slug: str) -> Project:
    """
    Проект по slug (в том числе soft-deleted: его страницу можно открыть и восстановить).
    """
    project = db.query(Project).filter(Project.slug == slug).first()
    if not project:
        raise ProjectNotFound()
    return project

def update_project(db: Session, slug: str, data: dict) -> Project:
    """
    Частичное обновление: меняются только переданные поля.
    """
    project = get_project_by_slug(db, slug)

    changes = {}
    if "name" in data and data["name"] is not None:
        name = data["name"].strip()
        if not name:
            raise ProjectValidationError("Project name cannot be empty")
        changes["name"] = name
    if "problem" in data:
        changes["problem"] = _clean_optional(data["problem"])
    if "mvp_definition" in data:
        changes["mvp_definition"] = _clean_optional(data["mvp_definition"])
    if data.get("status") is not None:
        if data["status"] not in PROJECT_STATUSES:
            raise ProjectValidationError(f"Invalid status: {data['status']}")
        changes["status"] = data["status"]

    for field, value in changes.items():
        setattr(project, field, value)

    try:
        db.commit()
        db.refresh(project)
        logger.info(f"Updated project {project.slug} fields: {sorted(data.keys())}")
        return project
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to update project: {e}")
        raise

def soft_delete_project(db: Session, slug: str) -> Project:
    """
    Помечает проект как удалённый (soft-delete).
    """
    project = get_project_by_slug(db, slug)
    project.deleted_at = utcnow()
    try:
        db.commit()
        logger.info(f"Soft-deleted project {project.slug}")
        return project
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to soft-delete project: {e}")
        raise

def hard_delete_project(db: Session, slug: str) -> None:
    """
    Удаляет проект навсегда вместе с задачами, промптами, фазами, решениями, журналом и контекстом.
    Идеи из Quick Capture остаются, связь с проектом обнуляется.
    """
    project = get_project_by_slug(db, slug)
    for capture in project.quick_captures:
        capture.project_id = None
    try:
        db.delete(project)
        db.commit()
        logger.info(f"Permanently deleted project {slug}")
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to delete project: {e}")
        raise

def restore_project(db: Session, slug: str) -> Project:
    """
    Снимает soft-delete. Повторный вызов — ProjectValidationError.
    """
    project = get_project_by_slug(db, slug)
    if project.deleted_at is None:
        raise ProjectValidationError("Project is not deleted")
    project.deleted_at = None
    try:
        db.commit()
        db.refresh(project)
        logger.info(f"Restored project {project.slug}")
        return project
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to restore project: {e}")
        raise

def get_context_document(db: Session, slug: str) -> ContextDocument:
    """
    Контекст-документ проекта; создаётся на лету, если его нет.
    """
    project = get_project_by_slug(db, slug)
    if project.context_doc is not None:
        return project.context_doc
    return regenerate_context_document(db, slug)

def regenerate_context_document(db: Session, slug: str) -> ContextDocument:
    """
    Пересобирает контекст-документ по текущему состоянию проекта и задач.
    """
    project = get_project_by_slug(db, slug)
    content = build_context_document(project, project.tasks)
    if project.context_doc is None:
        project.context_doc = ContextDocument(content=content)
    else:
        project.context_doc.content = content
        project.context_doc.last_generated = utcnow()
    try:
        db.commit()
        db.refresh(project.context_doc)
        logger.info(f"Regenerated context document for project {project.slug}")
        return project.context_doc
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to regenerate context document: {e}")
        raise
