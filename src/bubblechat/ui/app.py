"""Main Textual TUI application.

Wires the transcript viewport, the input line and the chat session together
and hands each submitted line to the conversation callback.
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input

from .config import QUIT_COMMAND, LogLevel
from .models import Sender
from .session import ChatSession
from .styles import APP_CSS
from .themes import TERMINAL_GREEN
from .widgets import ChatInputBar, ChatViewport, LogPanel

MessageCallback = Callable[[str], Awaitable[None] | None]


class BubbleChatApp(App):
    """Textual TUI rendering the conversation as message bubbles."""

    CSS = APP_CSS
    TITLE = "Messages"
    SUB_TITLE = "Esc/Ctrl+C to quit"

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True),
        Binding("escape", "quit", "Quit"),
        Binding("ctrl+d", "toggle_log", "Log", priority=True),
        Binding("ctrl+y", "copy_transcript", "Copy"),
    ]

    def __init__(
        self,
        session: ChatSession | None = None,
        on_user_message: MessageCallback | None = None,
        log_level: str | None = None,
    ) -> None:
        super().__init__()
        self.session = session or ChatSession()
        self._on_user_message = on_user_message
        self._log_level = log_level

    def compose(self) -> ComposeResult:
        yield Header()
        yield ChatViewport(id="chat-viewport")
        yield LogPanel(id="log-panel")
        yield ChatInputBar(placeholder="iMessage", id="chat-input")
        yield Footer()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.register_theme(TERMINAL_GREEN)
        self.theme = "terminal-green"

        if self._log_level is not None:
            log_panel = self.query_one("#log-panel", LogPanel)
            log_panel.log_level = LogLevel.from_string(self._log_level)
            log_panel.show()
            log_panel.info("TUI", f"Log panel enabled with level: {self._log_level.upper()}")

        self.session.attach(self.query_one("#chat-viewport", ChatViewport), scheduler=self)
        self.query_one("#chat-input", ChatInputBar).focus()

    def on_unmount(self) -> None:
        """Stop the typing timer when the app exits."""
        self.session.close()

    def log_event(self, level: str, component: str, message: str) -> None:
        """Route a collaborator's debug callback to the log panel."""
        if not self.is_running:
            return
        self.query_one("#log-panel", LogPanel).log_event(level, component, message)

    def on_chat_viewport_resized(self, event: ChatViewport.Resized) -> None:
        self.session.render()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle a submitted line from the input bar."""
        input_bar = self.query_one("#chat-input", ChatInputBar)
        value = event.value.strip()
        input_bar.reset()

        if not value:
            return
        if value == QUIT_COMMAND:
            self.exit()
            return

        input_bar.add_to_history(value)
        self.session.append(Sender.SELF, value)
        if self._on_user_message is not None:
            self._deliver(value)

    @work(group="conversation")
    async def _deliver(self, text: str) -> None:
        """Run the conversation callback as a background async worker."""
        try:
            result = self._on_user_message(text)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            self.log_event("error", "TUI", f"Exception: {e}")
            self.session.set_typing(False)
            self.session.append(Sender.SYSTEM, f"Error: {e}")

    def action_toggle_log(self) -> None:
        """Toggle the log panel visibility."""
        log_panel = self.query_one("#log-panel", LogPanel)
        is_visible = log_panel.toggle()
        self.notify(f"Log panel {'shown' if is_visible else 'hidden'}", timeout=2)

    def action_copy_transcript(self) -> None:
        """Copy the plain transcript to the clipboard."""
        viewport = self.query_one("#chat-viewport", ChatViewport)
        self.copy_to_clipboard(viewport.get_plain_text())
        self.notify("Transcript copied", timeout=2)


async def run_chat_tui(
    llm: Any,
    store: Any | None = None,
    classifier: Any | None = None,
    log_level: str | None = None,
) -> None:
    """Run the Textual TUI.

    Args:
        llm: LLM provider instance
        store: Chat store for history and notes (None disables both)
        classifier: Dialog-act classifier gating replies (None replies to all)
        log_level: Log level for panel (debug/info/warning/error), None to hide
    """
    from ..conversation import ConversationAgent

    session = ChatSession()
    agent = ConversationAgent(llm, session=session, store=store, classifier=classifier)
    app = BubbleChatApp(
        session=session,
        on_user_message=agent.handle_user_message,
        log_level=log_level,
    )
    app.sub_title = f"{llm.model} | Esc/Ctrl+C to quit"
    agent.set_debug_callback(app.log_event)

    try:
        await app.run_async()
    except (KeyboardInterrupt, asyncio.CancelledError):
        pass
    finally:
        session.close()
