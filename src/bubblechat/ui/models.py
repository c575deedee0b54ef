"""Data models for the TUI.

Hides the internal representation of chat messages and sender identities.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import uuid4


class Sender(str, Enum):
    """Who a message belongs to; decides alignment and style."""

    SELF = "self"                  # The person at the keyboard
    COUNTERPARTY = "counterparty"  # The model on the other end
    SYSTEM = "system"              # Status and error annotations


@dataclass(frozen=True)
class Message:
    """A chat message in the conversation.

    Messages are immutable once created; the session only ever appends them.
    """

    sender: Sender
    text: str
    timestamp: datetime = field(default_factory=datetime.now)
    id: str = field(default_factory=lambda: uuid4().hex)
