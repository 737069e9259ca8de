# vibepm/api/ai.py
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from vibepm.schemas.ai import AnalyzeRequest, AnalyzeResponse, SuggestionsRequest, ProjectSuggestions
from vibepm.dependencies import get_db
from vibepm.core.exceptions import AIConfigurationError, AIProviderError
from vibepm.services.ai_config import get_ai_config
from vibepm.services.ai_features import analyze_ideas, generate_project_suggestions

logger = logging.getLogger("VibePM.AIAPI")

router = APIRouter(prefix="/api", tags=["AI"])

@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(data: AnalyzeRequest, db: Session = Depends(get_db)):
    """
    AI-анализ пакета идей: разбор, развитие и план реализации.
    """
    if not data.items:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No items provided for analysis")
    try:
        config = get_ai_config(db)
        if config is None:
            raise AIConfigurationError()
        analysis = await analyze_ideas(config, [item.content for item in data.items])
        logger.info(f"Analyzed {len(data.items)} idea(s) with {config.provider}/{config.model}")
        return AnalyzeResponse(original_items=data.items, analysis=analysis)
    except (AIConfigurationError, AIProviderError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to analyze ideas: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to analyze ideas")

@router.post("/promote-to-project/generate", response_model=ProjectSuggestions)
async def promote_to_project(data: SuggestionsRequest, db: Session = Depends(get_db)):
    """
    Предложения для превращения идеи в проект: имя, проблема, MVP и уточняющие вопросы.
    """
    if not data.capture_id or not data.content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="captureId and content are required")
    try:
        config = get_ai_config(db)
        if config is None:
            raise AIConfigurationError()
        answers = [answer.model_dump() for answer in data.user_answers or []]
        return await generate_project_suggestions(config, data.content, data.analysis, answers)
    except (AIConfigurationError, AIProviderError) as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except Exception as e:
        logger.error(f"Failed to generate project suggestions: {e}", exc_info=True)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to generate project suggestions")
