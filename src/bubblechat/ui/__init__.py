"""Terminal UI module for bubblechat.

Provides a Textual-based TUI that shows the conversation as message bubbles.

Module structure (each module hides a design decision):
- models.py: Data structures (message, sender identity)
- formatting.py: Word wrapping and width measurement
- bubbles.py: Bubble borders, padding, colors, timestamps
- layout.py: Placement of bubbles in the viewport, typing indicator
- session.py: Mutable chat state and the typing timer
- widgets.py: Custom widgets (transcript viewport, input history, log panel)
- styles.py: CSS styling (layout decisions)
- themes.py: Color palettes and theme configuration
- app.py: Application orchestration (user interaction flow)
"""

from .app import BubbleChatApp, run_chat_tui
from .bubbles import Bubble, format_bubble
from .config import LogLevel
from .formatting import wrap_text
from .layout import render_transcript
from .models import Message, Sender
from .session import ChatSession
from .widgets import ChatInputBar, ChatViewport, LogPanel

__all__ = [
    "Bubble",
    "BubbleChatApp",
    "ChatInputBar",
    "ChatSession",
    "ChatViewport",
    "LogLevel",
    "LogPanel",
    "Message",
    "Sender",
    "format_bubble",
    "render_transcript",
    "run_chat_tui",
    "wrap_text",
]
