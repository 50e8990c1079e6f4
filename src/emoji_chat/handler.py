"""Emoji handler, the translation engine.

``EmojiHandler`` owns every piece of emoji state and exposes the operations
a chat host calls per message.

State
-----
All dictionaries live in an :class:`EmojiSnapshot`, a frozen bundle that
is built completely by :meth:`EmojiHandler.load` and then published with a
single attribute assignment.  Every translation call reads the snapshot
once, so a reload running on another thread is never observed half-done.

The per-user shortcut opt-out set is the only state outside the snapshot.
It is guarded by a lock, survives :meth:`~EmojiHandler.load` (it is a user
preference, kept for the lifetime of the process) and is cleared by
:meth:`~EmojiHandler.disable`.

Load sequence
-------------
1. Read the raw configuration via the ``config_loader`` callable.
2. Resolve ``pack-variant``; an unknown id falls back to
   :data:`~emoji_chat.packs.DEFAULT_VARIANT` with a warning.
3. Build the token dictionary from the token list.  An unreadable list
   leaves the dictionary empty.
4. Validate the configuration.  If it is incomplete or malformed, stop
   here: every emoji enabled, no shortcuts, no color fix-up.
5. Build the shortcut table and, when ``disable-emojis`` is on, carve the
   disabled glyphs out of the dictionary.
6. Publish the snapshot.

Every failure in this sequence is logged as a warning and recovered; the
handler is always usable afterwards.

Substitution passes
-------------------
Each pass walks its table in order and, per key, reports the number of
occurrences to the metrics sink and then replaces them all with
``str.replace``.  Passes are sequential on purpose: text produced by an
earlier key is visible to later keys.
"""

from __future__ import annotations

import logging
import math
import threading
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

import yaml

from emoji_chat.coloring import MIN_COLORED_LENGTH, detect_chat_color, wrap_glyph
from emoji_chat.config import (
    PACK_VARIANT_KEY,
    ConfigError,
    EmojiChatConfig,
    load_config,
    read_pack_variant,
    validate_config,
)
from emoji_chat.dictionary import build_emoji_dictionary, read_token_lines
from emoji_chat.metrics import MetricsSink, NullMetrics
from emoji_chat.packs import DEFAULT_VARIANT, PackVariant
from emoji_chat.shortcuts import apply_disabled_list, build_shortcuts

logger = logging.getLogger(__name__)

#: Entries per page returned by :meth:`EmojiHandler.list_emojis`.
DEFAULT_PAGE_SIZE = 45

_EMPTY: Mapping[str, str] = MappingProxyType({})


@dataclass(frozen=True)
class EmojiSnapshot:
    """Everything one load produced.

    Attributes:
        variant:             Pack variant the glyphs were assigned from.
                             ``UNRESOLVED`` only for the empty snapshot.
        emojis:              Token → glyph, ascending by token.
        shortcuts:           Alias → delimited token, in configuration order.
        disabled_characters: Glyphs removed from ``emojis``, in the order
                             they were listed.
        fix_coloring:        Whether the chat color fix-up runs.
    """

    variant: PackVariant = PackVariant.UNRESOLVED
    emojis: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    shortcuts: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    disabled_characters: tuple[str, ...] = ()
    fix_coloring: bool = False


@dataclass(frozen=True)
class EmojiPage:
    """One page of the emoji list.

    Attributes:
        page:    1-indexed page number actually returned (after clamping).
        pages:   Total number of pages; at least 1.
        entries: ``(token, glyph)`` pairs on this page.
    """

    page: int
    pages: int
    entries: list[tuple[str, str]]


class EmojiHandler:
    """Builds the emoji tables and translates messages with them.

    Args:
        config_loader: Returns the raw configuration mapping.  Called on
                       every :meth:`load`, so a reload picks up edits.
        token_loader:  Returns the token list lines.  Defaults to the
                       packaged ``resources/list.txt``.
        metrics:       Receives usage counts.  Defaults to a no-op sink.
        autoload:      Call :meth:`load` from the constructor.
    """

    def __init__(
        self,
        *,
        config_loader: Callable[[], Any] = load_config,
        token_loader: Callable[[], Iterable[str]] = read_token_lines,
        metrics: MetricsSink | None = None,
        autoload: bool = True,
    ) -> None:
        self._config_loader = config_loader
        self._token_loader = token_loader
        self._metrics: MetricsSink = metrics if metrics is not None else NullMetrics()
        self._snapshot = EmojiSnapshot()
        self._shortcuts_off: set[Hashable] = set()
        self._shortcuts_off_lock = threading.Lock()
        if autoload:
            self.load()

    # ── Accessors ────────────────────────────────────────────────────────────

    @property
    def snapshot(self) -> EmojiSnapshot:
        return self._snapshot

    @property
    def emojis(self) -> Mapping[str, str]:
        return self._snapshot.emojis

    @property
    def shortcuts(self) -> Mapping[str, str]:
        return self._snapshot.shortcuts

    @property
    def disabled_characters(self) -> tuple[str, ...]:
        return self._snapshot.disabled_characters

    @property
    def fix_coloring(self) -> bool:
        return self._snapshot.fix_coloring

    @property
    def pack_variant(self) -> PackVariant:
        return self._snapshot.variant

    # ── Lifecycle ────────────────────────────────────────────────────────────

    def load(self) -> EmojiSnapshot:
        """(Re)build every table from the current configuration.

        Safe to call repeatedly.  The previous snapshot stays visible until
        the new one is complete.  The shortcut opt-out set is kept.

        Returns:
            The newly published snapshot.
        """
        data = self._read_config()

        variant = read_pack_variant(data)
        if not variant.is_resolved:
            logger.warning(
                "Unknown pack-variant %r; falling back to the %s pack.",
                _raw_pack_variant(data),
                DEFAULT_VARIANT.name.lower(),
            )
            variant = DEFAULT_VARIANT

        emojis = self._load_emojis(variant)

        cfg = self._parse_config(data)
        if cfg is None:
            snapshot = EmojiSnapshot(variant=variant, emojis=MappingProxyType(emojis))
        else:
            shortcuts = build_shortcuts(cfg.shortcuts)
            disabled: tuple[str, ...] = ()
            if cfg.disable_emojis:
                emojis, disabled = apply_disabled_list(emojis, cfg.disabled_emojis)
            snapshot = EmojiSnapshot(
                variant=variant,
                emojis=MappingProxyType(emojis),
                shortcuts=MappingProxyType(shortcuts),
                disabled_characters=disabled,
                fix_coloring=cfg.fix_emoji_coloring,
            )

        self._snapshot = snapshot
        logger.info(
            "Loaded %d emojis (%s pack), %d shortcuts, %d disabled.",
            len(snapshot.emojis),
            variant.name.lower(),
            len(snapshot.shortcuts),
            len(snapshot.disabled_characters),
        )
        return snapshot

    def disable(self) -> None:
        """Clear every table and the shortcut opt-out set."""
        self._snapshot = EmojiSnapshot()
        with self._shortcuts_off_lock:
            self._shortcuts_off.clear()

    def _read_config(self) -> Any:
        try:
            return self._config_loader()
        except (OSError, UnicodeDecodeError, yaml.YAMLError):
            logger.warning("Could not read the EmojiChat config.", exc_info=True)
            return {}

    def _load_emojis(self, variant: PackVariant) -> dict[str, str]:
        try:
            return build_emoji_dictionary(variant, self._token_loader())
        except (OSError, UnicodeDecodeError):
            logger.warning(
                "An error occurred while loading emojis. No emojis are available.",
                exc_info=True,
            )
            return {}

    def _parse_config(self, data: Any) -> EmojiChatConfig | None:
        """Return the parsed configuration, or ``None`` if it is unusable."""
        missing = validate_config(data)
        problem = f"missing keys: {', '.join(missing)}" if missing else None
        cfg = None
        if not missing:
            try:
                cfg = EmojiChatConfig.from_dict(data)
            except ConfigError as exc:
                problem = str(exc)

        if cfg is None:
            logger.warning("Your config is invalid (%s). No configuration data was loaded.", problem)
            logger.warning("Fix your config, then reload EmojiChat.")
            logger.warning(
                "If you're still running into issues after fixing your config, "
                "delete it and restart your server."
            )
        return cfg

    # ── Translation ──────────────────────────────────────────────────────────

    def to_emoji(self, message: str) -> str:
        """Replace every emoji token in *message* with its glyph."""
        snapshot = self._snapshot
        return _expand(message, snapshot.emojis, self._metrics.add_emoji_used, str)

    def to_emoji_from_chat(self, message: str) -> str:
        """Replace emoji tokens in a chat message, fixing glyph colors.

        With the color fix-up on and a message of at least three
        characters, each glyph is wrapped in the neutral color and followed
        by the message's leading chat color (if it has one).  Otherwise
        this is :meth:`to_emoji`.
        """
        snapshot = self._snapshot
        if not snapshot.fix_coloring or len(message) < MIN_COLORED_LENGTH:
            return _expand(message, snapshot.emojis, self._metrics.add_emoji_used, str)

        chat_color = detect_chat_color(message)
        return _expand(
            message,
            snapshot.emojis,
            self._metrics.add_emoji_used,
            lambda glyph: wrap_glyph(glyph, chat_color),
        )

    def translate_shorthand(self, message: str) -> str:
        """Replace configured shortcut aliases with their emoji tokens."""
        snapshot = self._snapshot
        return _expand(message, snapshot.shortcuts, self._metrics.add_shortcut_used, str)

    def contains_disabled_character(self, message: str) -> bool:
        """Return ``True`` if *message* contains any disabled glyph."""
        return any(glyph in message for glyph in self._snapshot.disabled_characters)

    # ── Shortcut opt-out ─────────────────────────────────────────────────────

    def has_shortcuts_off(self, user_id: Hashable) -> bool:
        with self._shortcuts_off_lock:
            return user_id in self._shortcuts_off

    def toggle_shortcuts_off(self, user_id: Hashable) -> bool:
        """Flip the shortcut opt-out for *user_id*.

        Returns:
            ``True`` if shortcuts are now off for the user.
        """
        with self._shortcuts_off_lock:
            if user_id in self._shortcuts_off:
                self._shortcuts_off.discard(user_id)
                return False
            self._shortcuts_off.add(user_id)
            return True

    # ── Listing ──────────────────────────────────────────────────────────────

    def list_emojis(self, page: int = 1, per_page: int = DEFAULT_PAGE_SIZE) -> EmojiPage:
        """Return one page of ``(token, glyph)`` pairs, ascending by token.

        Out-of-range page numbers are clamped to the first/last page.

        Raises:
            ValueError: If *per_page* is not positive.
        """
        if per_page <= 0:
            raise ValueError("per_page must be positive.")
        items = list(self._snapshot.emojis.items())
        pages = max(1, math.ceil(len(items) / per_page))
        page = min(max(page, 1), pages)
        start = (page - 1) * per_page
        return EmojiPage(page=page, pages=pages, entries=items[start : start + per_page])


def _expand(
    message: str,
    table: Mapping[str, str],
    report: Callable[[int], None],
    render: Callable[[str], str],
) -> str:
    for key, value in table.items():
        report(message.count(key))
        message = message.replace(key, render(value))
    return message


def _raw_pack_variant(data: Any) -> Any:
    try:
        return data.get(PACK_VARIANT_KEY)
    except (AttributeError, TypeError):
        return None
