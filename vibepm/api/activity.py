# vibepm/api/activity.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vibepm.schemas.activity import ActivityCreate, ActivityRead
from vibepm.crud.activity import create_activity
from vibepm.dependencies import get_db
from vibepm.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger("VibePM.ActivityAPI")

router = APIRouter(prefix="/api/activity", tags=["Activity"])

@router.post("", response_model=ActivityRead, status_code=status.HTTP_201_CREATED)
def create_new_activity(data: ActivityCreate, db: Session = Depends(get_db)):
    """
    Добавить запись в ленту активности проекта.
    """
    try:
        return create_activity(db, data.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create activity: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create activity")
