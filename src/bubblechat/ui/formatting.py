"""Text formatting utilities for the TUI.

Hides the details of word wrapping and width measurement. All widths are
terminal cells as measured by Rich, so wide glyphs count double.
"""

from rich.cells import cell_len, chop_cells

from .config import MIN_WRAP_WIDTH


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]; low wins if the bounds cross."""
    return max(low, min(high, value))


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text into lines no wider than width.

    - Whitespace runs inside a paragraph collapse to single spaces
    - Words longer than width are hard-split into width-sized chunks
    - Every newline starts a new paragraph; a blank line separates
      paragraphs, with no trailing blank after the last one

    Args:
        text: Raw message text
        width: Target width in cells (values below 1 fall back to the floor)

    Returns:
        Wrapped lines; empty list for empty text
    """
    if width < 1:
        width = MIN_WRAP_WIDTH
    if not text:
        return []

    paragraphs = text.split("\n")
    last_index = len(paragraphs) - 1
    lines: list[str] = []

    for index, paragraph in enumerate(paragraphs):
        line = ""
        for word in paragraph.split():
            candidate = f"{line} {word}" if line else word
            if cell_len(candidate) <= width:
                line = candidate
                continue

            if line:
                lines.append(line)
            if cell_len(word) > width:
                lines.extend(chop_cells(word, width))
                line = ""
            else:
                line = word

        if line:
            lines.append(line)
        if index != last_index:
            lines.append("")

    return lines


def truncate(text: str, limit: int) -> str:
    """Shorten text to limit characters, marking the cut with an ellipsis."""
    if len(text) <= limit:
        return text
    return text[: max(0, limit - 3)] + "..."
