"""LLM infrastructure implementations."""

from stokmakmur.infrastructure.llm.base import BaseLLMProvider, CircuitBreaker
from stokmakmur.infrastructure.llm.factory import get_llm_provider
from stokmakmur.infrastructure.llm.ollama import OllamaProvider, get_ollama_provider

__all__ = [
    "BaseLLMProvider",
    "CircuitBreaker",
    "OllamaProvider",
    "get_ollama_provider",
    "get_llm_provider",
]
