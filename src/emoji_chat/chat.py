"""Per-message emoji flow for a chat host.

``ChatPipeline`` is what a host's chat listener calls for every message a
user sends.  It never raises and never mutates handler state.

Chat flow (``process_chat``)
----------------------------
1. ``allowed=False`` (the host's permission check failed) → unchanged.
2. Message contains a disabled glyph → cancelled; the host should show
   :data:`DISABLED_CHARACTER_MESSAGE` to the sender.
3. Unless the sender turned shortcuts off → shortcut aliases expanded.
4. Emoji tokens replaced, with the chat color fix-up.

``process_text`` follows the same steps for surfaces that are not colored
chat (signs, books) and uses the plain replacement in step 4.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass

from emoji_chat.handler import EmojiHandler

logger = logging.getLogger(__name__)

DISABLED_CHARACTER_MESSAGE = "Oops! You can't use disabled emoji characters!"


@dataclass(frozen=True)
class ChatOutcome:
    """Result of running a message through the pipeline.

    Attributes:
        message:   Text to deliver; the original text when cancelled.
        cancelled: ``True`` if the host must drop the message.
        reason:    Message for the sender when cancelled, else ``None``.
    """

    message: str
    cancelled: bool = False
    reason: str | None = None


class ChatPipeline:
    """Runs chat text through an :class:`EmojiHandler`."""

    def __init__(self, handler: EmojiHandler) -> None:
        self._handler = handler

    def process_chat(self, user_id: Hashable, message: str, *, allowed: bool = True) -> ChatOutcome:
        """Translate a chat message sent by *user_id*."""
        return self._process(user_id, message, allowed, self._handler.to_emoji_from_chat)

    def process_text(self, user_id: Hashable, text: str, *, allowed: bool = True) -> ChatOutcome:
        """Translate non-chat text (sign lines, book pages) written by *user_id*."""
        return self._process(user_id, text, allowed, self._handler.to_emoji)

    def _process(
        self,
        user_id: Hashable,
        message: str,
        allowed: bool,
        to_emoji: Callable[[str], str],
    ) -> ChatOutcome:
        if not allowed:
            return ChatOutcome(message)

        if self._handler.contains_disabled_character(message):
            logger.debug("Rejected message from %s: contains a disabled emoji glyph.", user_id)
            return ChatOutcome(message, cancelled=True, reason=DISABLED_CHARACTER_MESSAGE)

        if not self._handler.has_shortcuts_off(user_id):
            message = self._handler.translate_shorthand(message)

        return ChatOutcome(to_emoji(message))
