"""Transcript layout.

Hides how bubbles are placed in the viewport: which side each sender sits
on, how wide bubbles may grow, and how the typing indicator is drawn. The
whole transcript is laid out from scratch on every call.
"""

from collections.abc import Iterable
from datetime import datetime

from rich.text import Text

from .bubbles import Bubble, format_bubble
from .config import (
    BUBBLE_WIDTH_RATIO,
    DEFAULT_VIEWPORT_WIDTH,
    OTHER_LEFT_INDENT,
    SELF_RIGHT_MARGIN,
    TYPING_BUBBLE_MAX_WIDTH,
    TYPING_FRAMES,
)
from .models import Message, Sender


def typing_glyph(frame: int) -> str:
    """Get the animation glyph for a typing frame."""
    return TYPING_FRAMES[frame % len(TYPING_FRAMES)]


def bubble_indent(sender: Sender | str, bubble: Bubble, viewport_width: int) -> int:
    """Left padding that puts a bubble on its sender's side."""
    if sender == Sender.SELF:
        return max(0, viewport_width - bubble.width - SELF_RIGHT_MARGIN)
    return OTHER_LEFT_INDENT


def _emit(out: list[Text], bubble: Bubble, indent: int) -> None:
    pad = " " * indent
    for line in bubble.lines:
        out.append(Text(pad) + line)
    out.append(Text())


def render_transcript(
    messages: Iterable[Message],
    viewport_width: int | None,
    *,
    typing_active: bool = False,
    typing_frame: int = 0,
    now: datetime | None = None,
) -> Text:
    """Lay out every message, plus the typing bubble, as one block of text.

    Args:
        messages: Messages in chronological order
        viewport_width: Columns available; unknown or non-positive uses 80
        typing_active: Whether to draw the counterparty typing bubble
        typing_frame: Animation frame for the typing glyph
        now: Timestamp for the typing bubble (defaults to the current time)

    Returns:
        Non-wrapping Rich Text, one line per display row
    """
    width = viewport_width if viewport_width and viewport_width > 0 else DEFAULT_VIEWPORT_WIDTH
    max_bubble = int(width * BUBBLE_WIDTH_RATIO)

    out: list[Text] = []
    for message in messages:
        bubble = format_bubble(message.sender, message.text, message.timestamp, max_bubble)
        _emit(out, bubble, bubble_indent(message.sender, bubble, width))

    if typing_active:
        bubble = format_bubble(
            Sender.COUNTERPARTY,
            typing_glyph(typing_frame),
            now or datetime.now(),
            min(TYPING_BUBBLE_MAX_WIDTH, max_bubble),
        )
        _emit(out, bubble, OTHER_LEFT_INDENT)

    return Text("\n", no_wrap=True, overflow="crop").join(out)
