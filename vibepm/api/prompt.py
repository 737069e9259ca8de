# vibepm/api/prompt.py
import logging
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from vibepm.schemas.prompt import PromptCreate, PromptRead, PromptUpdate, PromptDetail, GeneratePromptRequest
from vibepm.schemas.response import SuccessResponse
from vibepm.crud.prompt import create_prompt, get_prompt, update_prompt, delete_prompt
from vibepm.services.prompt_generation import generate_prompt_for_task
from vibepm.dependencies import get_db
from vibepm.core.exceptions import NotFoundError, ValidationError, AIConfigurationError, AIProviderError

logger = logging.getLogger("VibePM.PromptsAPI")

router = APIRouter(prefix="/api/prompts", tags=["Prompts"])

@router.post("", response_model=PromptRead, status_code=status.HTTP_201_CREATED)
def create_new_prompt(data: PromptCreate, db: Session = Depends(get_db)):
    """
    Сохранить промпт вручную.
    """
    try:
        return create_prompt(db, data.model_dump())
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error creating prompt: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create prompt")

@router.post("/generate", response_model=PromptRead, status_code=status.HTTP_201_CREATED)
async def generate_prompt(data: GeneratePromptRequest, response: Response, db: Session = Depends(get_db)):
    """
    Сгенерировать AI-промпт для задачи. 201 — создан новый, 200 — у задачи промпт уже был.
    """
    try:
        prompt, created = await generate_prompt_for_task(db, data.task_id, data.project_id)
        if not created:
            response.status_code = status.HTTP_200_OK
        return prompt
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except (AIConfigurationError, AIProviderError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        logger.error(f"Error generating prompt: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate prompt")

@router.get("/{prompt_id}", response_model=PromptDetail)
def get_one_prompt(prompt_id: str, db: Session = Depends(get_db)):
    """
    Промпт с краткой информацией о задаче.
    """
    try:
        return get_prompt(db, prompt_id)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error fetching prompt {prompt_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch prompt")

@router.patch("/{prompt_id}", response_model=PromptRead)
def update_one_prompt(prompt_id: str, data: PromptUpdate, db: Session = Depends(get_db)):
    try:
        return update_prompt(db, prompt_id, data.model_dump(exclude_unset=True))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except Exception as e:
        logger.error(f"Error updating prompt {prompt_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update prompt")

@router.delete("/{prompt_id}", response_model=SuccessResponse)
def delete_one_prompt(prompt_id: str, db: Session = Depends(get_db)):
    try:
        delete_prompt(db, prompt_id)
        return SuccessResponse()
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except Exception as e:
        logger.error(f"Error deleting prompt {prompt_id}: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete prompt")
