"""EmojiChat: emoji shortcut translation for game chat.

Turns shortcut tokens such as ``:100:`` inside chat messages into single
glyphs taken from a contiguous run of Unicode code points.  A resource pack
on the client side renders those code points as emoji.

Package structure
-----------------
packs.py       PackVariant: which run of code points is used.
dictionary.py  build_emoji_dictionary: token list → glyph assignment.
shortcuts.py   build_shortcuts, apply_disabled_list: config-driven tables.
config.py      EmojiChatConfig: YAML configuration and validation.
coloring.py    Chat color helpers for the color fix-up pass.
metrics.py     UsageMetrics: emoji and shortcut usage counters.
handler.py     EmojiHandler: owns all state; the translation engine.
chat.py        ChatPipeline: per-message flow used by a chat host.

Version Management
------------------
``__version__`` is read from the installed package metadata at import time.
The single source of truth is the ``version`` field in ``pyproject.toml``.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from emoji_chat.chat import ChatOutcome, ChatPipeline
from emoji_chat.handler import EmojiHandler, EmojiSnapshot
from emoji_chat.packs import PackVariant

try:
    __version__: str = version("emoji_chat")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ChatOutcome",
    "ChatPipeline",
    "EmojiHandler",
    "EmojiSnapshot",
    "PackVariant",
    "__version__",
]
