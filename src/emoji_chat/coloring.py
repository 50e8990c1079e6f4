"""Chat color helpers for the emoji color fix-up.

Colored chat recolors every character in the message, emoji glyphs
included, which distorts them.  The fix-up wraps each inserted glyph as::

    NEUTRAL_COLOR + glyph + <original chat color, if the message had one>

so the glyph renders uncolored and the text after it keeps its color.
"""

from __future__ import annotations

#: Section sign that starts a legacy chat formatting code (``§a`` = green).
COLOR_CHAR = "§"

#: White; renders glyphs with their own colors.
NEUTRAL_COLOR = f"{COLOR_CHAR}f"

#: Messages shorter than this are never treated as colored.
MIN_COLORED_LENGTH = 3


def detect_chat_color(message: str) -> str | None:
    """Return the color code heading *message*, if any.

    Only the first two characters are inspected.  They count as a chat
    color when they contain :data:`COLOR_CHAR`.
    """
    prefix = message[:2]
    return prefix if COLOR_CHAR in prefix else None


def wrap_glyph(glyph: str, chat_color: str | None) -> str:
    """Return *glyph* forced to the neutral color, resuming *chat_color*."""
    return f"{NEUTRAL_COLOR}{glyph}{chat_color or ''}"
