"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, list highlight)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Pink/violet palette in the style of the Charm terminal tools
TERMCHAT_DARK = Theme(
    name="termchat-dark",
    primary="#ff5fd2",      # Pink - selection and focus
    secondary="#7d56f4",    # Violet - assistant messages
    accent="#ffd75f",       # Yellow - highlights
    foreground="#dddddd",
    background="#16161d",
    success="#73f59f",
    warning="#ffaf5f",
    error="#ff5f87",
    surface="#1f1f28",
    panel="#1a1a22",
    dark=True,
    variables={
        "border": "#3c3c4a",
        "border-blurred": "#2a2a35",

        "scrollbar": "#2a2a35",
        "scrollbar-hover": "#3c3c4a",
        "scrollbar-active": "#ff5fd2",
        "scrollbar-background": "#1a1a22",

        "footer-key-foreground": "#ffd75f",
        "footer-description-foreground": "#a0a0b0",

        "text-muted": "#777788",

        "input-cursor-background": "#dddddd",
        "input-cursor-foreground": "#16161d",
        "input-selection-background": "#7d56f4 30%",
    },
)
