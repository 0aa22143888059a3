"""Theme definitions for the TUI.

This module hides the design decisions about:
- Color palettes and visual appearance
- Theme variables (borders, scrollbars, footer)

To add a new theme, define it here and register in the app.
"""

from textual.theme import Theme

# Dark theme modelled on the destiny.gg web chat
DGG_DARK = Theme(
    name="dgg-dark",
    primary="#6b9bd1",      # Chat accent blue
    secondary="#8e7cc3",    # User list purple
    accent="#e6b450",       # Highlights
    foreground="#d0d0d0",
    background="#0d0d0d",
    success="#7dbb6a",
    warning="#e5a04f",
    error="#d9534f",
    surface="#161616",
    panel="#111111",
    dark=True,
    variables={
        "block-cursor-foreground": "#0d0d0d",
        "block-cursor-background": "#d0d0d0",
        "input-cursor-background": "#d0d0d0",
        "input-cursor-foreground": "#0d0d0d",
        "input-selection-background": "#6b9bd1 30%",

        "border": "#2a2a2a",
        "border-blurred": "#1f1f1f",

        "scrollbar": "#2a2a2a",
        "scrollbar-hover": "#3a3a3a",
        "scrollbar-active": "#6b9bd1",
        "scrollbar-background": "#111111",

        "footer-foreground": "#a0a0a0",
        "footer-background": "#0d0d0d",
        "footer-key-foreground": "#e6b450",
        "footer-key-background": "#1f1f1f",

        "text-muted": "#707070",
    },
)
