"""AI 호출 재시도 정책 - 최대 재시도 횟수 + 고정(또는 배수) 지연.

서킷 브레이커 없음. 재시도 소진 시 AdvisorBusyError.

Usage:
    policy = RetryPolicy.from_config()
    text = await policy.run(lambda: llm.generate(prompt))
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

from newslens.domain.config import LLMConfig, get_config
from newslens.exceptions import AdvisorBusyError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 2
    delay: float = 1.0
    backoff: float = 1.0  # 1.0 = 고정 지연
    sleep: Callable[[float], Awaitable[None]] = field(default=asyncio.sleep, repr=False, compare=False)

    @classmethod
    def from_config(cls, config: LLMConfig | None = None) -> "RetryPolicy":
        config = config or get_config().llm
        return cls(max_retries=config.max_retries, delay=config.retry_delay, backoff=config.retry_backoff)

    @property
    def max_attempts(self) -> int:
        return self.max_retries + 1

    def delay_for(self, attempt: int) -> float:
        """attempt 번째 실패 후 대기 시간 (attempt 는 1부터)."""
        return self.delay * self.backoff ** (attempt - 1)

    async def run(self, fn: Callable[[], Awaitable[T]]) -> T:
        last_error: Exception | None = None
        for attempt in range(1, self.max_attempts + 1):
            try:
                return await fn()
            except Exception as e:
                last_error = e
                if attempt == self.max_attempts:
                    break
                wait = self.delay_for(attempt)
                logger.warning("AI call failed (attempt %d/%d), retrying in %.1fs: %s", attempt, self.max_attempts, wait, e)
                await self.sleep(wait)

        logger.error("AI call failed after %d attempts: %s", self.max_attempts, last_error)
        raise AdvisorBusyError() from last_error
