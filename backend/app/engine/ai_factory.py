"""
Chat model factory for tournament summaries.

config/models.yaml names a provider per model; each provider below turns the
resolved entry into a LangChain chat model. Keys missing from the catalogue
are routed by name ("gpt-*", "claude-*", "gemini-*").
"""

from abc import ABC, abstractmethod
from typing import Optional

from langchain_anthropic import ChatAnthropic
from langchain_google_genai import ChatGoogleGenerativeAI
from langchain_openai import ChatOpenAI

from backend.app.core.registry import ModelConfig, registry

SUMMARY_TEMPERATURE = 0.2
REQUEST_TIMEOUT = 30
MAX_RETRIES = 2


class SummaryModelProvider(ABC):
    @abstractmethod
    def chat_model(self, model_id: str, entry: ModelConfig, temperature: float):
        """Return a LangChain chat model for model_id."""


class OpenAIProvider(SummaryModelProvider):
    def chat_model(self, model_id, entry, temperature):
        extra = entry.api_config or {}
        return ChatOpenAI(
            model=model_id,
            temperature=temperature,
            timeout=REQUEST_TIMEOUT,
            max_retries=MAX_RETRIES,
            **({"base_url": extra["base_url"]} if extra.get("base_url") else {}),
        )


class AnthropicProvider(SummaryModelProvider):
    def chat_model(self, model_id, entry, temperature):
        return ChatAnthropic(model=model_id, temperature=temperature, timeout=REQUEST_TIMEOUT, max_retries=MAX_RETRIES)


class GoogleProvider(SummaryModelProvider):
    def chat_model(self, model_id, entry, temperature):
        return ChatGoogleGenerativeAI(
            model=model_id, temperature=temperature, timeout=REQUEST_TIMEOUT, max_retries=MAX_RETRIES
        )


PROVIDERS = {
    "openai": OpenAIProvider(),
    "anthropic": AnthropicProvider(),
    "google": GoogleProvider(),
}

NAME_HINTS = (("gpt", "openai"), ("claude", "anthropic"), ("gemini", "google"))


def resolve_model(model_key: str) -> ModelConfig:
    """The catalogue entry for model_key, or one inferred from its name."""
    entry: Optional[ModelConfig] = registry.get_model(model_key)
    if entry:
        return entry
    for hint, provider in NAME_HINTS:
        if hint in model_key:
            return ModelConfig(provider=provider, label=model_key)
    raise ValueError(f"Unknown model: {model_key}")


def get_llm(model_key: str, temperature: float = SUMMARY_TEMPERATURE):
    entry = resolve_model(model_key)
    provider = PROVIDERS.get(entry.provider)
    if not provider:
        raise ValueError(f"Unsupported provider: {entry.provider}")
    # model_id overrides the catalogue key when the API name differs
    return provider.chat_model(entry.model_id or model_key, entry, temperature)
