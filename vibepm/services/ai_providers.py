# vibepm/services/ai_providers.py
"""
Единый интерфейс к chat-completion API трёх провайдеров (OpenAI, Anthropic, Gemini).

Каждый провайдер формирует свой запрос и разбирает свой ответ, наружу отдаётся только
AICompletion(content, usage). Выбор провайдера — get_provider() по AIConfig.provider.
"""
import logging
import time
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import httpx

from vibepm.core.exceptions import AIProviderError
from vibepm.core.settings import settings
from vibepm.services.ai_config import AIConfig, OPENAI, ANTHROPIC, GOOGLE

logger = logging.getLogger("VibePM.AI")

FALLBACK_CONTENT = "No response generated"

@dataclass
class AICompletion:
    content: str
    usage: Any = None

def _dig(data: Any, *path) -> Any:
    """Безопасный доступ к вложенным полям ответа: _dig(data, "choices", 0, "message", "content")."""
    current = data
    for key in path:
        try:
            current = current[key]
        except (KeyError, IndexError, TypeError):
            return None
    return current


class ChatProvider(ABC):
    """
    Базовый провайдер: HTTP-вызов, обработка ошибок и логирование общие,
    формат запроса/ответа задают наследники.
    """
    label: str = "AI"
    model_aliases: Dict[str, str] = {}
    default_model: str = ""

    def __init__(self, api_key: str, model: str, client: Optional[httpx.AsyncClient] = None):
        self.api_key = api_key
        self.model = self.resolve_model(model)
        self._client = client

    @classmethod
    def resolve_model(cls, model: str) -> str:
        return cls.model_aliases.get(model, cls.default_model)

    @abstractmethod
    def build_request(
        self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float
    ) -> Tuple[str, Dict[str, str], Dict[str, str], Dict[str, Any]]:
        """Возвращает (url, headers, query params, json body)."""

    @abstractmethod
    def parse_response(self, data: Dict[str, Any]) -> AICompletion:
        ...

    def error_message(self, response: httpx.Response) -> str:
        try:
            payload = response.json()
        except ValueError:
            payload = None
        message = _dig(payload, "error", "message")
        if isinstance(message, str) and message:
            return message
        return f"{self.label} API error"

    async def complete(
        self, system_prompt: str, user_prompt: str, *, max_tokens: int = 1000, temperature: float = 0.7
    ) -> AICompletion:
        request_id = uuid.uuid4().hex[:8]
        url, headers, params, body = self.build_request(system_prompt, user_prompt, max_tokens, temperature)
        logger.info(f"[{request_id}] Calling {self.label} API: model={self.model}, max_tokens={max_tokens}")
        started = time.monotonic()

        if self._client is not None:
            response = await self._post(self._client, url, headers, params, body)
        else:
            timeout_config = httpx.Timeout(10.0, read=settings.AI_TIMEOUT_SECONDS)
            async with httpx.AsyncClient(timeout=timeout_config) as client:
                response = await self._post(client, url, headers, params, body)

        duration_ms = int((time.monotonic() - started) * 1000)
        logger.info(f"[{request_id}] {self.label} API responded {response.status_code} in {duration_ms}ms")

        if response.is_error:
            message = self.error_message(response)
            logger.error(f"[{request_id}] {self.label} API error {response.status_code}: {message}")
            raise AIProviderError(message, status_code=response.status_code)
        try:
            data = response.json()
        except ValueError:
            logger.error(f"[{request_id}] {self.label} API returned non-JSON body")
            raise AIProviderError(f"{self.label} API returned an invalid response")

        completion = self.parse_response(data)
        if completion.usage:
            logger.info(f"[{request_id}] Token usage: {completion.usage}")
        return completion

    async def _post(self, client: httpx.AsyncClient, url, headers, params, body) -> httpx.Response:
        try:
            return await client.post(url, headers=headers, params=params or None, json=body)
        except httpx.TimeoutException:
            logger.error(f"Timeout while contacting {self.label} API at {url}")
            raise AIProviderError(f"{self.label} API timed out")
        except httpx.RequestError as e:
            logger.error(f"Request error while contacting {self.label} API: {e}")
            raise AIProviderError(f"{self.label} API request failed: {e.__class__.__name__}")


class OpenAIProvider(ChatProvider):
    label = "OpenAI"
    default_model = "gpt-4o"
    model_aliases = {
        "gpt-5.2": "gpt-5.2",
        "gpt-4o": "gpt-4o",
        "gpt-4o-mini": "gpt-4o-mini",
        "gpt-4-turbo": "gpt-4-turbo",
        "gpt-4": "gpt-4",
        "gpt-3.5-turbo": "gpt-3.5-turbo",
    }

    def build_request(self, system_prompt, user_prompt, max_tokens, temperature):
        url = f"{settings.OPENAI_BASE_URL}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}
        body = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        return url, headers, {}, body

    def parse_response(self, data):
        content = _dig(data, "choices", 0, "message", "content")
        return AICompletion(content=content or FALLBACK_CONTENT, usage=data.get("usage"))


class AnthropicProvider(ChatProvider):
    label = "Anthropic"
    default_model = "claude-3-5-sonnet-20241022"
    model_aliases = {
        "claude-3-opus": "claude-3-opus-20240229",
        "claude-3-sonnet": "claude-3-5-sonnet-20241022",
        "claude-3-haiku": "claude-3-haiku-20240307",
    }

    def build_request(self, system_prompt, user_prompt, max_tokens, temperature):
        url = f"{settings.ANTHROPIC_BASE_URL}/messages"
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": settings.ANTHROPIC_VERSION,
        }
        body = {
            "model": self.model,
            "system": system_prompt,
            "messages": [{"role": "user", "content": user_prompt}],
            "temperature": temperature,
            "max_tokens": max_tokens,
        }
        return url, headers, {}, body

    def parse_response(self, data):
        content = _dig(data, "content", 0, "text")
        return AICompletion(content=content or FALLBACK_CONTENT, usage=data.get("usage"))


class GeminiProvider(ChatProvider):
    label = "Gemini"
    default_model = "gemini-2.5-flash"
    model_aliases = {
        "gemini-pro": "gemini-pro",
        "gemini-2.5-pro": "gemini-2.5-pro",
        "gemini-2.5-flash": "gemini-2.5-flash",
        "gemini-1.5-pro": "gemini-1.5-pro",
        "gemini-1.5-flash": "gemini-1.5-flash",
    }

    def build_request(self, system_prompt, user_prompt, max_tokens, temperature):
        url = f"{settings.GEMINI_BASE_URL}/models/{self.model}:generateContent"
        # system role в этой интеграции не используется: оба промпта идут одним текстом
        body = {
            "contents": [{"parts": [{"text": f"{system_prompt}\n\n{user_prompt}"}]}],
            "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
        }
        return url, {}, {"key": self.api_key}, body

    def parse_response(self, data):
        content = _dig(data, "candidates", 0, "content", "parts", 0, "text")
        return AICompletion(content=content or FALLBACK_CONTENT, usage=None)


PROVIDERS = {
    OPENAI: OpenAIProvider,
    ANTHROPIC: AnthropicProvider,
    GOOGLE: GeminiProvider,
}

def get_provider(config: AIConfig, client: Optional[httpx.AsyncClient] = None) -> ChatProvider:
    provider_cls = PROVIDERS.get(config.provider)
    if provider_cls is None:
        raise AIProviderError(f"Unsupported AI provider: {config.provider}")
    return provider_cls(api_key=config.api_key, model=config.model, client=client)

async def complete(
    config: AIConfig,
    system_prompt: str,
    user_prompt: str,
    *,
    max_tokens: int = 1000,
    temperature: float = 0.7,
    client: Optional[httpx.AsyncClient] = None,
) -> AICompletion:
    """
    Один вызов выбранного провайдера с нормализованным результатом.
    """
    provider = get_provider(config, client=client)
    return await provider.complete(system_prompt, user_prompt, max_tokens=max_tokens, temperature=temperature)
