"""Message bubble construction.

This module hides the design decisions about:
- Border glyphs and padding around message text
- Per-sender colors
- Where the timestamp sits under a bubble

Bubbles are built from Rich Text so styles travel as spans beside the plain
text. Every width calculation reads the plain cell length and never has to
strip markup.
"""

from dataclasses import dataclass
from datetime import datetime

from rich.text import Text

from .config import (
    BUBBLE_BORDER_OVERHEAD,
    BUBBLE_PADDING_X,
    MIN_WRAP_WIDTH,
    TIMESTAMP_FORMAT,
)
from .formatting import clamp, wrap_text
from .models import Sender

SENDER_STYLES = {
    Sender.SELF: "cyan",
    Sender.COUNTERPARTY: "grey70",
    Sender.SYSTEM: "green",
}
DEFAULT_STYLE = "white"
TIMESTAMP_STYLE = "grey50"


@dataclass
class Bubble:
    """A rendered bubble: decorated lines plus the columns they occupy."""

    lines: list[Text]
    width: int


def style_for(sender: Sender | str) -> str:
    """Get the bubble style for a sender, falling back to a neutral style."""
    try:
        return SENDER_STYLES[Sender(sender)]
    except ValueError:
        return DEFAULT_STYLE


def format_timestamp(timestamp: datetime) -> str:
    return timestamp.strftime(TIMESTAMP_FORMAT)


def format_bubble(
    sender: Sender | str,
    text: str,
    timestamp: datetime,
    max_width: int,
) -> Bubble:
    """Build the bordered block for one message.

    The bubble shrinks to its longest wrapped line instead of always filling
    max_width. Below 14 columns the content floor takes precedence over
    max_width.

    Args:
        sender: Sender identity, selects the style and timestamp alignment
        text: Message text (newlines are paragraph breaks)
        timestamp: Shown under the bubble as hour:minute
        max_width: Widest the whole bubble may be, borders included

    Returns:
        Bubble with top border, content lines, bottom border, timestamp line
    """
    max_inner = clamp(max_width - BUBBLE_BORDER_OVERHEAD, MIN_WRAP_WIDTH, max_width)
    content = [Text(line) for line in wrap_text(text, max_inner)]
    longest = max((line.cell_len for line in content), default=0)
    content_width = min(max_inner, max(1, longest))

    inner = content_width + BUBBLE_PADDING_X * 2
    style = style_for(sender)
    padding = " " * BUBBLE_PADDING_X

    lines = [Text(f"╭{'─' * inner}╮", style=style)]
    for line in content:
        fill = " " * (content_width - line.cell_len)
        lines.append(Text(f"│{padding}{line.plain}{fill}{padding}│", style=style))
    lines.append(Text(f"╰{'─' * inner}╯", style=style))

    width = inner + 2
    stamp = format_timestamp(timestamp)
    if sender == Sender.SELF:
        indent = max(0, width - len(stamp) - 1)
    else:
        indent = 1
    lines.append(Text(" " * indent) + Text(stamp, style=TIMESTAMP_STYLE))

    return Bubble(lines=lines, width=width)
