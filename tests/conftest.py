"""Pytest configuration and shared fixtures."""
from datetime import datetime

import pytest

from bubblechat.llm import ChatMessage, LLMProvider, LLMResponse


class ManualTimer:
    """Timer handle whose callback only fires when the test says so."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.stopped = False

    def stop(self):
        self.stopped = True


class ManualScheduler:
    """Scheduler that records timers instead of running them."""

    def __init__(self):
        self.timers: list[ManualTimer] = []

    def set_interval(self, interval, callback):
        timer = ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def live(self) -> list[ManualTimer]:
        return [timer for timer in self.timers if not timer.stopped]

    def tick(self, times: int = 1) -> None:
        for _ in range(times):
            for timer in self.live:
                timer.callback()


class RecordingSurface:
    """Display surface that keeps every call for inspection."""

    def __init__(self, width: int = 80):
        self.width = width
        self.calls: list[str] = []
        self.content = None

    @property
    def viewport_width(self) -> int:
        return self.width

    def set_viewport_content(self, content):
        self.calls.append("set")
        self.content = content

    def scroll_to_bottom(self):
        self.calls.append("scroll")

    def refresh(self):
        self.calls.append("refresh")

    @property
    def plain(self) -> str:
        return self.content.plain if self.content is not None else ""


class FakeLLM(LLMProvider):
    """Provider returning scripted replies and recording each request."""

    def __init__(self, replies=None, error: Exception | None = None, tokens: int = 7):
        self.replies = list(replies or ["hello there"])
        self.error = error
        self.tokens = tokens
        self.requests: list[list[ChatMessage]] = []
        self.closed = False
        self.debug_callback = None

    @property
    def model(self) -> str:
        return "fake-model"

    def set_debug_callback(self, callback):
        self.debug_callback = callback

    async def chat_completion(self, messages, model=None, temperature=0.7, max_tokens=None, **kwargs):
        self.requests.append(list(messages))
        if self.error is not None:
            raise self.error
        content = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        return LLMResponse(content=content, model=self.model, usage={"total_tokens": self.tokens})

    async def close(self):
        self.closed = True


@pytest.fixture
def fixed_clock():
    """Clock frozen at 14:05."""
    moment = datetime(2024, 5, 17, 14, 5)
    return lambda: moment


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def llm_factory():
    """Build a FakeLLM with custom replies or a failure."""
    return FakeLLM
