from abc import ABC, abstractmethod
from typing import Any

from .models import ChatMessage, LLMResponse


class LLMProvider(ABC):
    """Remote chat-completion endpoint that produces the counterparty's replies.

    Hides which hosted service answers and how its client is set up. The
    conversation only ever hands over a list of role/content messages and
    reads back text plus token usage.

    Usable as an async context manager so the HTTP client is always released:
        async with create_llm_provider("groq", api_key=key) as llm:
            reply = await llm.chat_completion(messages)
    """

    @property
    @abstractmethod
    def model(self) -> str:
        """Model id used when a request does not name one."""

    @abstractmethod
    async def chat_completion(
        self,
        messages: list[ChatMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int | None = None,
        **kwargs: Any
    ) -> LLMResponse:
        """Ask the endpoint for the next assistant turn.

        Args:
            messages: System prompt followed by the rolling user/assistant context
            model: Override for the default model
            temperature: Sampling temperature; the chat uses 0
            max_tokens: Cap on reply length (None leaves it to the endpoint)
            **kwargs: Passed through to the underlying client

        Returns:
            Reply text, answering model and usage counts
        """

    @abstractmethod
    async def close(self) -> None:
        """Release the HTTP client."""

    async def __aenter__(self) -> "LLMProvider":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        # httpx may report a closed loop when shutdown races the client's own
        # cleanup; anything else propagates.
        try:
            await self.close()
        except RuntimeError as e:
            if "Event loop is closed" not in str(e):
                raise
