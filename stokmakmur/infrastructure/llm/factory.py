"""
LLM provider factory.

Creates appropriate provider based on configuration.
"""

from stokmakmur.config import get_settings
from stokmakmur.core.interfaces.llm import ILLMProvider


def get_llm_provider(provider_type: str | None = None) -> ILLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_type: "ollama" (default from settings)

    Returns:
        ILLMProvider instance
    """
    provider_type = provider_type or get_settings().llm.provider

    if provider_type == "ollama":
        from stokmakmur.infrastructure.llm.ollama import get_ollama_provider

        return get_ollama_provider()

    raise ValueError(f"Unknown LLM provider: {provider_type}")
