# vibepm/services/prompt_generation.py
import logging
from typing import Optional, Tuple

import httpx
from sqlalchemy.orm import Session

from vibepm.core.exceptions import AIConfigurationError, AIProviderError, PromptValidationError
from vibepm.crud.prompt import find_prompt_for_task, create_generated_prompt
from vibepm.crud.task import get_task
from vibepm.models.prompt import Prompt
from vibepm.services import ai_providers
from vibepm.services.ai_config import get_ai_config
from vibepm.services.ai_prompts import TASK_PROMPT_SYSTEM_PROMPT, build_task_prompt

logger = logging.getLogger("VibePM.PromptGeneration")

PROMPT_MAX_TOKENS = 1000

async def generate_prompt_for_task(
    db: Session,
    task_id: Optional[str],
    project_id: Optional[str],
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[Prompt, bool]:
    """
    Генерирует AI-промпт для задачи и сохраняет его.

    Идемпотентно по задаче: если промпт уже есть, он возвращается без вызова AI
    ((prompt, False)). Повторная проверка после ответа модели не даёт двум
    одновременным запросам создать два промпта.
    """
    if not task_id or not project_id:
        raise PromptValidationError("Task ID and Project ID are required")
    task = get_task(db, task_id)
    if task.project_id != project_id:
        raise PromptValidationError("Task does not belong to this project")

    existing = find_prompt_for_task(db, task.id)
    if existing is not None:
        logger.info(f"Prompt for task {task.id} already exists ({existing.id})")
        return existing, False

    config = get_ai_config(db)
    if config is None:
        raise AIConfigurationError()

    project = task.project
    completion = await ai_providers.complete(
        config,
        TASK_PROMPT_SYSTEM_PROMPT,
        build_task_prompt(
            project_name=project.name,
            project_problem=project.problem,
            mvp_definition=project.mvp_definition,
            task_title=task.title,
            task_description=task.description,
            complexity=task.complexity,
        ),
        max_tokens=PROMPT_MAX_TOKENS,
        client=client,
    )
    content = completion.content.strip()
    if not content or content == ai_providers.FALLBACK_CONTENT:
        raise AIProviderError("Failed to generate prompt content")

    # между проверкой и ответом модели проходят секунды
    db.expire_all()
    return create_generated_prompt(db, task, project_id, content)
