# vibepm/services/ai_features.py
"""
AI-функции приложения поверх диспетчера провайдеров: анализ идей, имя проекта,
структурированные предложения для «повышения» идеи в проект.
"""
import json
import logging
from typing import List, Optional, Sequence

import httpx
from pydantic import ValidationError as PydanticValidationError

from vibepm.schemas.ai import ProjectSuggestions, ClarifyingQuestion
from vibepm.services import ai_providers
from vibepm.services.ai_config import AIConfig
from vibepm.services.ai_prompts import (
    ANALYZE_SYSTEM_PROMPT,
    GENERATE_NAME_SYSTEM_PROMPT,
    build_analyze_prompt,
    build_generate_name_prompt,
    build_suggestions_system_prompt,
    build_suggestions_user_prompt,
)

logger = logging.getLogger("VibePM.AI")

ANALYZE_MAX_TOKENS = 2000
SUGGESTIONS_MAX_TOKENS = 1500
NAME_MAX_TOKENS = 50
NAME_TEMPERATURE = 0.9

FALLBACK_MVP = "## Must Have\n- Core feature\n\n## Should Have\n- Secondary feature"

def fallback_suggestions(content: str) -> ProjectSuggestions:
    """
    Заготовка проекта, когда модель вернула неразбираемый ответ.
    """
    return ProjectSuggestions(
        suggested_name="New Project",
        suggested_problem=content,
        suggested_mvp=FALLBACK_MVP,
        clarifying_questions=[
            ClarifyingQuestion(
                id="q1",
                question="What is the main goal of this project?",
                hint="Helps define the core scope",
            )
        ],
    )

def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[len("```json"):]
    elif cleaned.startswith("```"):
        cleaned = cleaned[len("```"):]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-len("```")]
    return cleaned.strip()

def parse_suggestions(text: str, content: str) -> ProjectSuggestions:
    """
    Разбирает JSON-ответ модели. При ошибке разбора возвращает fallback_suggestions (с предупреждением в логе).
    """
    try:
        return ProjectSuggestions.model_validate(json.loads(strip_code_fences(text)))
    except (ValueError, PydanticValidationError) as e:
        logger.warning(f"Could not parse project suggestions, using fallback: {e}")
        return fallback_suggestions(content)

async def analyze_ideas(
    config: AIConfig, contents: Sequence[str], client: Optional[httpx.AsyncClient] = None
) -> str:
    completion = await ai_providers.complete(
        config,
        ANALYZE_SYSTEM_PROMPT,
        build_analyze_prompt(contents),
        max_tokens=ANALYZE_MAX_TOKENS,
        client=client,
    )
    return completion.content

async def generate_project_name(
    config: AIConfig, current_name: str, problem: Optional[str], client: Optional[httpx.AsyncClient] = None
) -> str:
    """
    Короткое «брендовое» имя проекта без кавычек; пустой ответ модели оставляет текущее имя.
    """
    completion = await ai_providers.complete(
        config,
        GENERATE_NAME_SYSTEM_PROMPT,
        build_generate_name_prompt(current_name, problem),
        max_tokens=NAME_MAX_TOKENS,
        temperature=NAME_TEMPERATURE,
        client=client,
    )
    if completion.content == ai_providers.FALLBACK_CONTENT:
        return current_name
    name = completion.content.replace('"', "").replace("'", "").strip()
    return name or current_name

async def generate_project_suggestions(
    config: AIConfig,
    content: str,
    analysis: Optional[str],
    user_answers: Optional[List[dict]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> ProjectSuggestions:
    completion = await ai_providers.complete(
        config,
        build_suggestions_system_prompt(user_answers or []),
        build_suggestions_user_prompt(content, analysis),
        max_tokens=SUGGESTIONS_MAX_TOKENS,
        client=client,
    )
    return parse_suggestions(completion.content, content)
