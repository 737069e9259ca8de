# vibepm/api/step.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vibepm.schemas.task import StepCreate, StepRead, StepUpdate
from vibepm.schemas.response import SuccessResponse
from vibepm.crud.step import create_step, get_step, update_step, delete_step
from vibepm.dependencies import get_db
from vibepm.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger("VibePM.StepsAPI")

router = APIRouter(prefix="/api/steps", tags=["Steps"])

@router.post("", response_model=StepRead, status_code=status.HTTP_201_CREATED)
def create_new_step(data: StepCreate, db: Session = Depends(get_db)):
    try:
        return create_step(db, data.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating step: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create step")

@router.get("/{step_id}", response_model=StepRead)
def get_one_step(step_id: str, db: Session = Depends(get_db)):
    try:
        return get_step(db, step_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching step {step_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch step")

@router.patch("/{step_id}", response_model=StepRead)
def update_one_step(step_id: str, data: StepUpdate, db: Session = Depends(get_db)):
    """
    Переименовать, отметить выполненным или переставить шаг.
    """
    try:
        return update_step(db, step_id, data.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating step {step_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update step")

@router.delete("/{step_id}", response_model=SuccessResponse)
def delete_one_step(step_id: str, db: Session = Depends(get_db)):
    try:
        delete_step(db, step_id)
        return SuccessResponse()
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting step {step_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete step")
