from collections.abc import Callable
from typing import Any

from openai import AsyncOpenAI

from ..base import LLMProvider
from ..models import ChatMessage, LLMResponse

DebugCallback = Callable[[str, str, str], None]

# Characters of each request/response echoed to the debug log
DEBUG_PREVIEW_LENGTH = 120


def _usage_counts(completion: Any) -> dict[str, int] | None:
    """Token counts from a completion, or None when the endpoint sends none."""
    usage = completion.usage
    if not usage:
        return None
    return {
        "prompt_tokens": usage.prompt_tokens,
        "completion_tokens": usage.completion_tokens,
        "total_tokens": usage.total_tokens,
    }


class OpenAIProvider(LLMProvider):
    """Chat Completions over the OpenAI SDK.

    Works for OpenAI itself and for any endpoint speaking the same protocol
    when given a base_url (see GroqProvider).
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        base_url: str | None = None,
        organization: str | None = None,
        **client_kwargs: Any
    ):
        """
        Args:
            api_key: Key sent as the bearer token
            model: Model id used when a request names none
            base_url: Endpoint root; None means api.openai.com
            organization: OpenAI organization id, if any
            **client_kwargs: Extra AsyncOpenAI options (timeout, max_retries, ...)
        """
        self._model = model
        self._debug_callback: DebugCallback | None = None
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            organization=organization,
            **client_kwargs
        )

    @property
    def model(self) -> str:
        return self._model

    def set_debug_callback(self, callback: DebugCallback | None) -> None:
        """Set the callback receiving (level, component, message) traces."""
        self._debug_callback = callback

    def _debug(self, message: str) -> None:
        if self._debug_callback is not None:
            self._debug_callback("debug", "LLM", message)

    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        params: dict[str, Any] = {
            "model": model or self._model,
            "messages": [message.model_dump() for message in messages],
            "temperature": temperature,
            **kwargs,
        }
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        if messages:
            last = messages[-1]
            self._debug(f"> {last.role}: {last.content[:DEBUG_PREVIEW_LENGTH]}")

        completion = await self._client.chat.completions.create(**params)
        content = completion.choices[0].message.content or ""
        self._debug(f"< {content[:DEBUG_PREVIEW_LENGTH]}")

        return LLMResponse(
            content=content,
            model=completion.model,
            usage=_usage_counts(completion),
        )

    async def close(self) -> None:
        await self._client.close()
