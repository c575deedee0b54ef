"""
bubblechat: a terminal chat client that shows the conversation as message bubbles.

Replies come from a hosted chat-completion endpoint; an optional dialog-act
classifier decides which lines get an answer.
"""

__version__ = "0.1.0"

from .conversation import ConversationAgent
from .ui import BubbleChatApp, ChatSession, Message, Sender, render_transcript, wrap_text

__all__ = [
    "BubbleChatApp",
    "ChatSession",
    "ConversationAgent",
    "Message",
    "Sender",
    "render_transcript",
    "wrap_text",
]
