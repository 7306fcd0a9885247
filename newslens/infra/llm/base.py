"""LLM Provider 인터페이스 - 모든 provider가 구현해야 하는 계약."""

from abc import ABC, abstractmethod

from pydantic import BaseModel


class LLMResponse(BaseModel):
    """LLM 응답 표준 형식."""

    content: str
    model: str
    tokens_in: int = 0
    tokens_out: int = 0
    provider: str = ""


class BaseLLMProvider(ABC):
    """LLM Provider 추상 클래스.

    어드바이저/인사이트 호출은 단발 chat completion 만 사용.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        system: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> LLMResponse:
        """텍스트 생성."""
        ...

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider 식별자 (로깅용)."""
        ...
