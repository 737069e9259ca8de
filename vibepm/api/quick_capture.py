# vibepm/api/quick_capture.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List

from vibepm.schemas.quick_capture import CaptureCreate, CaptureRead, CaptureUpdate
from vibepm.schemas.response import SuccessResponse
from vibepm.crud.quick_capture import (
    create_capture,
    get_all_captures,
    get_capture,
    update_capture,
    soft_delete_capture,
    hard_delete_capture,
    restore_capture,
)
from vibepm.dependencies import get_db
from vibepm.core.exceptions import NotFoundError, ValidationError

logger = logging.getLogger("VibePM.QuickCaptureAPI")

router = APIRouter(prefix="/api/quick-capture", tags=["Quick Capture"])

@router.get("", response_model=List[CaptureRead])
def list_captures(
    deleted: bool = Query(False, description="true — только идеи в корзине"),
    db: Session = Depends(get_db),
):
    try:
        return get_all_captures(db, deleted=deleted)
    except Exception as e:
        logger.error(f"Failed to fetch quick captures: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch quick captures")

@router.post("", response_model=CaptureRead, status_code=status.HTTP_201_CREATED)
def create_new_capture(data: CaptureCreate, db: Session = Depends(get_db)):
    """
    Быстро записать идею.
    """
    try:
        return create_capture(db, data.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to create quick capture: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create quick capture")

@router.get("/{capture_id}", response_model=CaptureRead)
def get_one_capture(capture_id: str, db: Session = Depends(get_db)):
    try:
        return get_capture(db, capture_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to fetch quick capture {capture_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch quick capture")

@router.patch("/{capture_id}", response_model=CaptureRead)
def update_one_capture(capture_id: str, data: CaptureUpdate, db: Session = Depends(get_db)):
    """
    Изменить текст, анализ или привязать идею к проекту.
    """
    try:
        return update_capture(db, capture_id, data.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to update quick capture {capture_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update quick capture")

@router.delete("/{capture_id}", response_model=SuccessResponse)
def delete_one_capture(
    capture_id: str,
    permanent: bool = Query(False, description="true — удалить навсегда"),
    db: Session = Depends(get_db),
):
    try:
        if permanent:
            hard_delete_capture(db, capture_id)
        else:
            soft_delete_capture(db, capture_id)
        return SuccessResponse()
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to delete quick capture {capture_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete quick capture")

@router.post("/{capture_id}/restore", response_model=CaptureRead)
def restore_deleted_capture(capture_id: str, db: Session = Depends(get_db)):
    try:
        return restore_capture(db, capture_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to restore capture {capture_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to restore capture")
