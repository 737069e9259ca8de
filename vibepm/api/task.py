# vibepm/api/task.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vibepm.schemas.task import TaskCreate, TaskRead, TaskUpdate, TaskDetail
from vibepm.schemas.response import SuccessResponse
from vibepm.crud.task import create_task, get_task, update_task, delete_task
from vibepm.crud.settings import get_preferences
from vibepm.dependencies import get_db
from vibepm.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger("VibePM.TasksAPI")

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])

@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_new_task(data: TaskCreate, db: Session = Depends(get_db)):
    """
    Создать задачу в конце списка проекта. Сложность по умолчанию — из настройки defaultTaskComplexity.
    """
    try:
        default_complexity = get_preferences(db).default_task_complexity
        return create_task(db, data.model_dump(), default_complexity=default_complexity)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating task: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create task")

@router.get("/{task_id}", response_model=TaskDetail)
def get_one_task(task_id: str, db: Session = Depends(get_db)):
    """
    Задача с шагами и промптами.
    """
    try:
        return get_task(db, task_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching task {task_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch task")

@router.patch("/{task_id}", response_model=TaskRead)
def update_one_task(task_id: str, data: TaskUpdate, db: Session = Depends(get_db)):
    """
    Частичное обновление задачи; смена статуса попадает в ленту активности.
    """
    try:
        return update_task(db, task_id, data.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update task")

@router.delete("/{task_id}", response_model=SuccessResponse)
def delete_one_task(task_id: str, db: Session = Depends(get_db)):
    """
    Удалить задачу вместе с шагами и промптами.
    """
    try:
        delete_task(db, task_id)
        return SuccessResponse()
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting task {task_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete task")
