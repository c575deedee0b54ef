"""Chat session state.

Hides the mutable state behind the transcript: the message list, the typing
flag, and the timer that animates the typing bubble. State changes only
through append() and set_typing(); each change lays the transcript out again
and pushes it to the attached display.

Everything runs on one event loop, so a render never overlaps another and no
locking is needed.
"""

from collections.abc import Callable
from datetime import datetime
from typing import Any, Protocol

from .config import TYPING_TICK_SECONDS
from .layout import render_transcript
from .models import Message, Sender


class DisplaySurface(Protocol):
    """Where the rendered transcript goes."""

    @property
    def viewport_width(self) -> int: ...

    def set_viewport_content(self, content: Any) -> None: ...

    def scroll_to_bottom(self) -> None: ...

    def refresh(self) -> Any: ...


class TimerHandle(Protocol):
    def stop(self) -> Any: ...


class Scheduler(Protocol):
    """Source of repeating timers (Textual's App.set_interval fits)."""

    def set_interval(self, interval: float, callback: Callable[[], Any]) -> TimerHandle: ...


class ChatSession:
    """Messages plus typing indicator for one chat, owned by the caller.

    Example:
        session = ChatSession()
        session.attach(viewport, scheduler=app)
        session.append(Sender.SELF, "hi")
        session.set_typing(True)
    """

    def __init__(
        self,
        surface: DisplaySurface | None = None,
        scheduler: Scheduler | None = None,
        clock: Callable[[], datetime] = datetime.now,
        tick_seconds: float = TYPING_TICK_SECONDS,
    ) -> None:
        self._surface = surface
        self._scheduler = scheduler
        self._clock = clock
        self._tick_seconds = tick_seconds
        self._messages: list[Message] = []
        self._typing_active = False
        self._typing_frame = 0
        self._timer: TimerHandle | None = None

    @property
    def messages(self) -> tuple[Message, ...]:
        """Snapshot of the messages in insertion order."""
        return tuple(self._messages)

    @property
    def typing_active(self) -> bool:
        return self._typing_active

    @property
    def typing_frame(self) -> int:
        return self._typing_frame

    def attach(self, surface: DisplaySurface, scheduler: Scheduler | None = None) -> None:
        """Bind the display (and optionally the timer source), then render."""
        self._surface = surface
        if scheduler is not None:
            self._scheduler = scheduler
        if self._typing_active:
            self._start_timer()
        self.render()

    def append(self, sender: Sender, text: str) -> Message:
        """Add a message to the end of the conversation and re-render."""
        timestamp = self._clock()
        if self._messages and timestamp < self._messages[-1].timestamp:
            timestamp = self._messages[-1].timestamp

        message = Message(sender=Sender(sender), text=text, timestamp=timestamp)
        self._messages.append(message)
        self.render()
        return message

    def set_typing(self, active: bool) -> None:
        """Show or hide the counterparty typing bubble.

        Starting is idempotent: at most one timer ever runs. Stopping cancels
        the timer and resets the animation to its first frame.
        """
        self._typing_active = active
        if active:
            self._start_timer()
        else:
            self._cancel_timer()
            self._typing_frame = 0
        self.render()

    def render(self) -> None:
        """Lay out the transcript and push it to the display."""
        if self._surface is None:
            return

        content = render_transcript(
            self._messages,
            self._surface.viewport_width,
            typing_active=self._typing_active,
            typing_frame=self._typing_frame,
            now=self._clock(),
        )
        self._surface.set_viewport_content(content)
        self._surface.scroll_to_bottom()
        self._surface.refresh()

    def close(self) -> None:
        """Cancel any live timer; call at shutdown."""
        self._cancel_timer()

    def _tick(self) -> None:
        self._typing_frame += 1
        self.render()

    def _start_timer(self) -> None:
        if self._timer is None and self._scheduler is not None:
            self._timer = self._scheduler.set_interval(self._tick_seconds, self._tick)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.stop()
            self._timer = None
