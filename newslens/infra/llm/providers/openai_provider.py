"""OpenAI-compatible Provider - OpenRouter, OpenAI.

OpenRouter 는 OpenAI chat completions API 와 호환되므로 base_url 만 교체.
"""

import logging
from typing import Any

import openai

from newslens.domain.config import get_config
from newslens.exceptions import MalformedResponseError
from newslens.infra.llm.base import BaseLLMProvider, LLMResponse
from newslens.infra.llm.factory import register_provider

logger = logging.getLogger(__name__)

OPENROUTER_HEADERS = {
    "HTTP-Referer": "http://localhost:3000",
    "X-Title": "NewsLens AI",
}


class OpenAILLMProvider(BaseLLMProvider):
    """OpenAI chat completions Provider."""

    def __init__(
        self,
        *,
        api_key: str | None = None,
        base_url: str | None = None,
        default_model: str | None = None,
    ) -> None:
        config = get_config()
        self._api_key = api_key or config.secrets.openai_api_key
        self._base_url = base_url
        self._default_model = default_model or config.llm.model
        self._temperature = config.llm.temperature
        self._max_tokens = config.llm.max_tokens

        client_kwargs: dict[str, Any] = {
            "api_key": self._api_key,
            "timeout": config.llm.request_timeout,
            # 재시도는 RetryPolicy 가 담당
            "max_retries": 0,
        }
        if self._base_url:
            client_kwargs["base_url"] = self._base_url
        self._client = openai.AsyncOpenAI(**client_kwargs)

    @property
    def provider_name(self) -> str:
        return "openai"

    def _extra_headers(self) -> dict[str, str]:
        return {}

    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        model = self._default_model
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        response = await self._client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=self._temperature if temperature is None else temperature,
            max_tokens=max_tokens or self._max_tokens,
            extra_headers=self._extra_headers(),
        )

        if not response.choices:
            raise MalformedResponseError(f"{self.provider_name}: no choices in response")
        content = response.choices[0].message.content or ""
        usage = response.usage

        return LLMResponse(
            content=content,
            model=model,
            tokens_in=usage.prompt_tokens if usage else 0,
            tokens_out=usage.completion_tokens if usage else 0,
            provider=self.provider_name,
        )


class OpenRouterLLMProvider(OpenAILLMProvider):
    """OpenRouter (무료 모델 포함) - OPENROUTER_API_KEY 사용."""

    def __init__(self) -> None:
        config = get_config()
        super().__init__(
            api_key=config.secrets.openrouter_api_key,
            base_url=config.llm.base_url,
        )

    @property
    def provider_name(self) -> str:
        return "openrouter"

    def _extra_headers(self) -> dict[str, str]:
        return OPENROUTER_HEADERS


# 팩토리 자동 등록
register_provider("openai", OpenAILLMProvider)
register_provider("openrouter", OpenRouterLLMProvider)
