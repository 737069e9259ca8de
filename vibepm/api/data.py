# vibepm/api/data.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vibepm.schemas.data import ExportDocument, ExportData, PurgeResult
from vibepm.schemas.response import SuccessResponse
from vibepm.crud.data import EXPORT_VERSION, collect_export, clear_data, purge_deleted
from vibepm.crud.settings import get_preferences
from vibepm.dependencies import get_db
from vibepm.models.base import utcnow

logger = logging.getLogger("VibePM.DataAPI")

router = APIRouter(prefix="/api", tags=["Data"])

@router.get("/export", response_model=ExportDocument)
def export_all(db: Session = Depends(get_db)):
    """
    Выгрузить все данные одним JSON-документом.
    """
    try:
        data = ExportData.model_validate(collect_export(db))
        return ExportDocument(exported_at=utcnow(), version=EXPORT_VERSION, data=data)
    except Exception as e:
        logger.error(f"Failed to export data: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to export data")

@router.delete("/clear-data", response_model=SuccessResponse)
def clear_all(db: Session = Depends(get_db)):
    """
    Удалить все данные, кроме настроек.
    """
    try:
        clear_data(db)
        return SuccessResponse()
    except Exception as e:
        logger.error(f"Failed to clear data: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to clear data")

@router.delete("/purge-deleted", response_model=PurgeResult)
def purge_trash(db: Session = Depends(get_db)):
    """
    Окончательно удалить проекты и идеи, пролежавшие в корзине дольше softDeleteRetentionDays.
    """
    try:
        retention_days = get_preferences(db).soft_delete_retention_days
        counts = purge_deleted(db, retention_days)
        return PurgeResult(
            projects=counts["projects"],
            quick_captures=counts["quickCaptures"],
            retention_days=retention_days,
        )
    except Exception as e:
        logger.error(f"Failed to purge deleted items: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to purge deleted items")
