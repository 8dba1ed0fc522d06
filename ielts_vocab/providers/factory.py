from __future__ import annotations

from ielts_vocab.config import Settings
from ielts_vocab.providers.base import LLMProvider


def create_llm(settings: Settings) -> LLMProvider:
    if settings.llm_provider == "ollama":
        from ielts_vocab.providers.llm_ollama import OllamaProvider
        return OllamaProvider(base_url=settings.ollama_url, model=settings.llm_model)
    elif settings.llm_provider == "anthropic":
        from ielts_vocab.providers.llm_anthropic import AnthropicProvider
        return AnthropicProvider()
    elif settings.llm_provider == "openai":
        from ielts_vocab.providers.llm_openai import OpenAIProvider
        return OpenAIProvider()
    raise ValueError(f"Unknown LLM provider: {settings.llm_provider}")
