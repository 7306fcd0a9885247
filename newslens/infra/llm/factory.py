"""LLM Factory - 설정 기반 Provider 생성.

Usage:
    from newslens.infra.llm import LLMFactory

    provider = LLMFactory.get_provider()            # LLM_PROVIDER (기본 openrouter)
    provider = LLMFactory.get_provider("openai")
"""

import importlib
import logging
from functools import lru_cache

from newslens.domain.config import get_config

from .base import BaseLLMProvider

logger = logging.getLogger(__name__)

# Provider 이름 -> 클래스 매핑 (provider 모듈 import 시 자동 등록)
_PROVIDER_REGISTRY: dict[str, type[BaseLLMProvider]] = {}

_IMPORT_MAP = {
    "openai": "newslens.infra.llm.providers.openai_provider",
    "openrouter": "newslens.infra.llm.providers.openai_provider",
}


def register_provider(name: str, cls: type[BaseLLMProvider]) -> None:
    """런타임에 provider 등록."""
    _PROVIDER_REGISTRY[name] = cls
    logger.debug("Registered LLM provider: %s -> %s", name, cls.__name__)


class LLMFactory:
    """이름 -> Provider 인스턴스 팩토리."""

    @staticmethod
    @lru_cache
    def get_provider(name: str | None = None) -> BaseLLMProvider:
        provider_type = (name or get_config().llm.provider).lower()

        if provider_type not in _PROVIDER_REGISTRY:
            _try_import_provider(provider_type)

        provider_cls = _PROVIDER_REGISTRY.get(provider_type)
        if not provider_cls:
            raise ValueError(
                f"LLM provider '{provider_type}' not registered. Available: {list(_PROVIDER_REGISTRY.keys())}"
            )

        logger.info("LLM provider=%s", provider_type)
        return provider_cls()


def _try_import_provider(provider_type: str) -> None:
    """Provider 모듈 lazy import."""
    module_path = _IMPORT_MAP.get(provider_type)
    if not module_path:
        return
    try:
        importlib.import_module(module_path)
    except ImportError as e:
        logger.warning("Failed to import %s: %s", module_path, e)
