from typing import Any

from .base import LLMProvider
from .providers import GroqProvider, OpenAIProvider

_PROVIDERS: dict[str, type[OpenAIProvider]] = {
    "groq": GroqProvider,
    "openai": OpenAIProvider,
}


def create_llm_provider(provider: str, **config: Any) -> LLMProvider:
    """Build the completion provider named by LLM_PROVIDER.

    Args:
        provider: 'groq' or 'openai' (case-insensitive)
        **config: Constructor arguments; api_key is mandatory, model,
            base_url and client options are optional

    Returns:
        Provider ready for chat_completion()

    Raises:
        ValueError: Unknown provider name
        TypeError: api_key missing from config

    Example:
        >>> llm = create_llm_provider("groq", api_key="gsk_...")
        >>> llm.model
        'llama-3.1-8b-instant'
    """
    provider_class = _PROVIDERS.get(provider.lower())
    if provider_class is None:
        raise ValueError(
            f"Unsupported provider: {provider}. "
            f"Supported providers: {', '.join(repr(name) for name in _PROVIDERS)}"
        )

    if "api_key" not in config:
        raise TypeError(f"{provider_class.__name__} requires 'api_key' in config")
    return provider_class(**config)
