"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, etc.)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Green-on-black terminal palette with a cyan focus accent
TERMINAL_GREEN = Theme(
    name="terminal-green",
    primary="#00d7d7",      # Cyan - outgoing bubbles and focus
    secondary="#bcbcbc",    # Light gray - incoming bubbles
    accent="#00ffff",       # Bright cyan - focused input border
    foreground="#d0d0d0",
    background="#000000",
    success="#00d700",      # Green - chrome, system notes
    warning="#ffaf00",
    error="#ff5f5f",
    surface="#0a0a0a",
    panel="#121212",
    dark=True,
    variables={
        # Input styling
        "input-cursor-background": "#00d700",
        "input-cursor-foreground": "#000000",
        "input-selection-background": "#00d7d7 30%",

        # Border colors
        "border": "#303030",
        "border-blurred": "#1c1c1c",

        # Scrollbar styling
        "scrollbar": "#000000",
        "scrollbar-hover": "#303030",
        "scrollbar-active": "#00d7d7",
        "scrollbar-background": "#000000",
        "scrollbar-corner-color": "#000000",

        # Footer styling
        "footer-foreground": "#8a8a8a",
        "footer-background": "#000000",
        "footer-key-foreground": "#00d700",
        "footer-key-background": "#121212",

        # Text variants
        "text-muted": "#6c6c6c",
    },
)
