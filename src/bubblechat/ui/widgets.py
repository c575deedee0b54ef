"""Textual widgets for the chat screen.

- ChatViewport: the display surface the session renders into
- ChatInputBar: the line editor, with recall of earlier lines
- LogPanel: collapsible trace log fed by the debug callbacks
"""

from datetime import datetime

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.message import Message
from textual.widgets import Input, RichLog, Static

from .config import (
    INPUT_HISTORY_MAX_SIZE,
    LOG_MAX_MESSAGE_LENGTH,
    LOG_TIMESTAMP_FORMAT,
    LogLevel,
)
from .formatting import truncate


class ChatViewport(VerticalScroll):
    """Scrollable transcript pane.

    Holds a single Static whose content is replaced wholesale on every
    render; the session never patches individual bubbles.
    """

    BORDER_TITLE = "Messages"

    class Resized(Message):
        """Posted when the pane changes size and the transcript must reflow."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._transcript = Static(id="transcript")
        self._content: Text | str = ""

    def compose(self) -> ComposeResult:
        yield self._transcript

    @property
    def viewport_width(self) -> int:
        """Columns available to the transcript (0 before first layout)."""
        return self.scrollable_content_region.width

    def set_viewport_content(self, content: Text | str) -> None:
        self._content = content
        self._transcript.update(content)

    def scroll_to_bottom(self) -> None:
        # Scroll once the new content has a height, not before.
        self.call_after_refresh(self.scroll_end, animate=False)

    def get_plain_text(self) -> str:
        """Transcript without styles, for the clipboard."""
        if isinstance(self._content, Text):
            return self._content.plain
        return self._content

    def on_resize(self, event: events.Resize) -> None:
        self.post_message(self.Resized())


class ChatInputBar(Input):
    """Single-line message input.

    Up and Down walk through previously sent lines; stepping past the newest
    one restores whatever was being typed. Pasted newlines become spaces.
    """

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._sent: list[str] = []
        self._recall: int | None = None  # position in _sent while browsing
        self._draft = ""

    def _on_paste(self, event: events.Paste) -> None:
        if event.text:
            self.insert_text_at_cursor(" ".join(event.text.split()))
            event.prevent_default()
            event.stop()

    def _on_key(self, event: events.Key) -> None:
        if event.key not in ("up", "down"):
            return
        event.prevent_default()
        event.stop()
        self._step(-1 if event.key == "up" else 1)

    def _step(self, direction: int) -> None:
        if not self._sent:
            return
        if self._recall is None:
            if direction > 0:
                return
            self._draft = self.value
            self._recall = len(self._sent)

        self._recall = max(0, self._recall + direction)
        if self._recall >= len(self._sent):
            self._recall = None
            self.value = self._draft
        else:
            self.value = self._sent[self._recall]
        self.cursor_position = len(self.value)

    def add_to_history(self, line: str) -> None:
        """Remember a submitted line, skipping immediate repeats."""
        if line and (not self._sent or self._sent[-1] != line):
            self._sent.append(line)
            del self._sent[:-INPUT_HISTORY_MAX_SIZE]
        self._recall = None
        self._draft = ""

    def reset(self) -> None:
        """Clear the buffer and take focus for the next line."""
        self.clear()
        self.focus()


class LogPanel(RichLog):
    """Trace log for the chat, LLM, store, classifier and feed components.

    Hidden until --log-level is given or Ctrl+D is pressed. Entries below
    the current threshold are dropped, not just hidden.
    """

    BORDER_TITLE = "Log"

    LEVEL_STYLES = {
        LogLevel.DEBUG: "dim white",
        LogLevel.INFO: "cyan",
        LogLevel.WARNING: "yellow",
        LogLevel.ERROR: "red",
    }

    COMPONENT_STYLES = {
        "TUI": "cyan",
        "Chat": "green",
        "LLM": "magenta",
        "Store": "bright_green",
        "Classifier": "bright_yellow",
        "Feed": "bright_blue",
    }

    def __init__(self, *args, threshold: int = LogLevel.DEBUG, **kwargs) -> None:
        super().__init__(*args, markup=False, highlight=False, wrap=True, **kwargs)
        self._threshold = threshold

    @property
    def log_level(self) -> int:
        return self._threshold

    @log_level.setter
    def log_level(self, level: int) -> None:
        self._threshold = level
        self._refresh_subtitle()

    def _refresh_subtitle(self) -> None:
        self.border_subtitle = f"Level: {LogLevel.name(self._threshold)}" if self.display else "Hidden"

    def on_mount(self) -> None:
        self.display = False

    def log_event(self, level: str, component: str, message: str) -> None:
        """Debug-callback entry point; level given by name ("debug", "info", ...)."""
        self.log(component, message, LogLevel.from_string(level))

    def log(self, component: str, message: str, level: int = LogLevel.DEBUG) -> None:
        """Write one entry if it meets the threshold.

        Args:
            component: Source of the entry (TUI, Chat, LLM, Store, ...)
            message: Free text, truncated for display
            level: One of the LogLevel constants
        """
        if level < self._threshold:
            return

        self.write(Text.assemble(
            (datetime.now().strftime(LOG_TIMESTAMP_FORMAT), "dim"),
            " ",
            (f"{LogLevel.name(level):<5}", self.LEVEL_STYLES.get(level, "white")),
            " ",
            (f"[{component}]", self.COMPONENT_STYLES.get(component, "white")),
            " ",
            truncate(message, LOG_MAX_MESSAGE_LENGTH),
        ))

    def info(self, component: str, message: str) -> None:
        self.log(component, message, LogLevel.INFO)

    def show(self) -> None:
        self.display = True
        self._refresh_subtitle()

    def toggle(self) -> bool:
        """Flip visibility and return the new state."""
        self.display = not self.display
        self._refresh_subtitle()
        return self.display
