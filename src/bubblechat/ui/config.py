"""UI configuration constants.

Every width, ratio and interval the renderer uses lives here.
"""


class LogLevel:
    """Thresholds shared by the log panel and the console logger.

    Higher is more severe; an entry shows when its level is at or above the
    configured threshold.
    """

    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40

    _by_name = {"debug": DEBUG, "info": INFO, "warning": WARNING, "error": ERROR}

    @classmethod
    def name(cls, level: int) -> str:
        for name, value in cls._by_name.items():
            if value == level:
                return name.upper()
        return "UNKNOWN"

    @classmethod
    def from_string(cls, level_str: str) -> int:
        """Parse a level name; anything unrecognised means DEBUG."""
        return cls._by_name.get(level_str.strip().lower(), cls.DEBUG)


# Wrapping configuration
MIN_WRAP_WIDTH = 10  # Floor for wrap width and bubble content width

# Bubble configuration
BUBBLE_PADDING_X = 1  # Blank columns between border and text on each side
BUBBLE_BORDER_OVERHEAD = 2 + BUBBLE_PADDING_X * 2  # Two borders plus padding
TIMESTAMP_FORMAT = "%H:%M"

# Layout configuration
DEFAULT_VIEWPORT_WIDTH = 80  # Used when the display cannot report a width
BUBBLE_WIDTH_RATIO = 0.7  # Share of the viewport a bubble may occupy
SELF_RIGHT_MARGIN = 2  # Columns between a right-aligned bubble and the edge
OTHER_LEFT_INDENT = 1  # Indent for left-aligned bubbles
TYPING_BUBBLE_MAX_WIDTH = 18

# Typing indicator
TYPING_TICK_SECONDS = 0.3
TYPING_FRAMES = ("", ".", "..", "...")

# Input history configuration
INPUT_HISTORY_MAX_SIZE = 100  # Maximum entries in input history

# Log panel configuration
LOG_TIMESTAMP_FORMAT = "%H:%M:%S"
LOG_MAX_MESSAGE_LENGTH = 500  # Characters before truncating log messages

# Commands handled by the app itself
QUIT_COMMAND = "/quit"
