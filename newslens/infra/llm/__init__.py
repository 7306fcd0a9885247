"""LLM infrastructure - provider interface, factory, implementations."""

from .base import BaseLLMProvider, LLMResponse
from .factory import LLMFactory, register_provider

__all__ = [
    "BaseLLMProvider",
    "LLMResponse",
    "LLMFactory",
    "register_provider",
]
