# vibepm/api/project.py
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List

from vibepm.schemas.project import (
    ProjectCreate, ProjectRead, ProjectUpdate, ProjectListItem, ProjectDetail, ProjectCounts,
    ContextDocumentRead, GenerateNameRequest, GenerateNameResponse,
)
from vibepm.schemas.activity import ActivityPage
from vibepm.schemas.board import BoardRead, BoardDropRequest, InsightRead
from vibepm.schemas.response import SuccessResponse
from vibepm.crud.project import (
    create_project,
    get_all_projects,
    get_project_counts,
    update_project,
    soft_delete_project,
    hard_delete_project,
    restore_project,
    get_context_document,
    regenerate_context_document,
)
from vibepm.crud.activity import get_project_activities
from vibepm.dependencies import get_db, get_project_or_404
from vibepm.core.exceptions import (
    ValidationError, NotFoundError, AIConfigurationError, AIProviderError,
)
from vibepm.models.project import Project as ProjectModel
from vibepm.services.ai_config import get_ai_config
from vibepm.services.ai_features import generate_project_name
from vibepm.services.board import load_board, apply_drop
from vibepm.services.insights import build_insights

import logging

router = APIRouter(prefix="/api/projects", tags=["Projects"])
logger = logging.getLogger("VibePM.ProjectsAPI")

def _with_counts(schema, project: ProjectModel, counts: dict):
    item = schema.model_validate(project)
    item.count = ProjectCounts(**counts)
    return item

@router.get("", response_model=List[ProjectListItem])
def list_projects(
    deleted: bool = Query(False, description="true — только проекты в корзине"),
    db: Session = Depends(get_db),
):
    """
    Список проектов со счётчиками задач и промптов.
    """
    try:
        return [_with_counts(ProjectListItem, project, counts) for project, counts in get_all_projects(db, deleted=deleted)]
    except Exception as e:
        logger.error(f"Failed to list projects: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch projects")

@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
def create_new_project(data: ProjectCreate, db: Session = Depends(get_db)):
    """
    Создать новый проект (slug генерируется из имени).
    """
    try:
        return create_project(db, data.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Unexpected error in create_new_project: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create project")

@router.post("/generate-name", response_model=GenerateNameResponse)
async def generate_name(data: GenerateNameRequest, db: Session = Depends(get_db)):
    """
    Придумать короткое имя проекта с помощью AI.
    """
    current_name = data.current_name or ""
    try:
        config = get_ai_config(db)
        if config is None:
            raise AIConfigurationError()
        name = await generate_project_name(config, current_name, data.problem)
        return GenerateNameResponse(name=name)
    except (AIConfigurationError, AIProviderError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to generate project name: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate name")

@router.get("/{slug}", response_model=ProjectDetail)
def get_one_project(
    project: ProjectModel = Depends(get_project_or_404),
    db: Session = Depends(get_db),
):
    """
    Проект с задачами, промптами, фазами, решениями и контекст-документом.
    """
    try:
        counts = get_project_counts(db, [project.id])[project.id]
        return _with_counts(ProjectDetail, project, counts)
    except Exception as e:
        logger.error(f"Failed to fetch project {project.slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch project")

@router.patch("/{slug}", response_model=ProjectRead)
def update_one_project(slug: str, data: ProjectUpdate, db: Session = Depends(get_db)):
    """
    Обновить проект (только переданные поля).
    """
    try:
        return update_project(db, slug, data.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update project {slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update project")

@router.delete("/{slug}", response_model=SuccessResponse)
def delete_project(
    slug: str,
    permanent: bool = Query(False, description="true — удалить навсегда"),
    db: Session = Depends(get_db),
):
    """
    Переместить проект в корзину (soft-delete) или удалить навсегда.
    """
    try:
        if permanent:
            hard_delete_project(db, slug)
        else:
            soft_delete_project(db, slug)
        return SuccessResponse()
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete project {slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete project")

@router.post("/{slug}/restore", response_model=ProjectRead)
def restore_deleted_project(slug: str, db: Session = Depends(get_db)):
    """
    Восстановить проект из корзины.
    """
    try:
        return restore_project(db, slug)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to restore project {slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to restore project")

@router.get("/{slug}/activity", response_model=ActivityPage)
def project_activity(
    limit: int = Query(10, ge=1, le=100),
    offset: int = Query(0, ge=0),
    project: ProjectModel = Depends(get_project_or_404),
    db: Session = Depends(get_db),
):
    """
    Лента активности проекта (новые сверху).
    """
    try:
        activities, total, has_more = get_project_activities(db, project.id, limit=limit, offset=offset)
        return ActivityPage(activities=activities, total=total, has_more=has_more)
    except Exception as e:
        logger.error(f"Failed to fetch activities for {project.slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch activities")

@router.get("/{slug}/context", response_model=ContextDocumentRead)
def project_context(slug: str, db: Session = Depends(get_db)):
    """
    Markdown-контекст проекта для AI-ассистента.
    """
    try:
        return get_context_document(db, slug)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to fetch context for {slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch context")

@router.post("/{slug}/context", response_model=ContextDocumentRead)
def regenerate_project_context(slug: str, db: Session = Depends(get_db)):
    """
    Пересобрать контекст по текущему состоянию задач.
    """
    try:
        return regenerate_context_document(db, slug)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to regenerate context for {slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to regenerate context")

@router.get("/{slug}/board", response_model=BoardRead)
def project_board(project: ProjectModel = Depends(get_project_or_404)):
    """
    Канбан-доска: Todo, Prompts, In Progress, Done.
    """
    return load_board(project)

@router.get("/{slug}/insights", response_model=List[InsightRead])
def project_insights(project: ProjectModel = Depends(get_project_or_404)):
    """
    До четырёх подсказок по задачам и промптам проекта.
    """
    return build_insights(project.tasks, project.prompts)

@router.post("/{slug}/board/drop", response_model=BoardRead)
async def drop_on_board(
    data: BoardDropRequest,
    project: ProjectModel = Depends(get_project_or_404),
    db: Session = Depends(get_db),
):
    """
    Бросить задачу/промпт в колонку. Недопустимый бросок — 400.
    """
    if data.item is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing is being dragged")
    try:
        return await apply_drop(db, project, data.item.type, data.item.id, data.lane)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (AIConfigurationError, AIProviderError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to apply board drop on {project.slug}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update board")
