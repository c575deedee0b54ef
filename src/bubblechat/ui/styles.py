"""CSS styles for the TUI.

Hides layout and styling decisions from the application logic.
Uses Textual CSS features: nesting, pseudo-classes, variables.

Layout: a one-row header, the transcript filling the middle, the optional
log panel under it, and a three-row bordered input at the bottom.
Bubble colors are not set here; they travel with the rendered text.
"""

APP_CSS = """
/* ============================================
   Main Screen Layout
   ============================================ */
Screen {
    layout: vertical;
    background: $background;
}

Header {
    height: 1;
    background: $background;
    color: $success;
}

/* ============================================
   Transcript - Message Bubbles
   ============================================ */
#chat-viewport {
    height: 1fr;
    background: $background;
    border: none;
    padding: 0;
    scrollbar-gutter: stable;
    scrollbar-size-vertical: 1;
}

#transcript {
    width: 100%;
    height: auto;
    background: transparent;
}

/* ============================================
   Log Panel
   ============================================ */
#log-panel {
    height: auto;
    min-height: 6;
    max-height: 12;
    background: $panel;
    border: round $warning 60%;
    border-title-color: $warning;
    border-title-style: bold;
    border-title-align: left;
    border-subtitle-color: $text-muted;
    border-subtitle-align: right;
    padding: 0 1;
    scrollbar-gutter: stable;

    &:focus {
        border: round $warning;
    }
}

/* ============================================
   Input - Line Entry
   ============================================ */
#chat-input {
    height: 3;
    padding: 0 1;
    border: round $success;
    background: $background;
    color: $success;

    &:focus {
        border: round $accent;
    }
}
"""
