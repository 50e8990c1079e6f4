"""
EmojiChat configuration management.

This module loads the operator's YAML configuration and turns it into a typed,
frozen :class:`EmojiChatConfig`.  The file is looked up with a clear priority
order:

    1. Explicit path passed to :func:`load_config`
    2. ``EMOJICHAT_CONFIG`` environment variable
    3. Config file (config/emojichat.yml) - for static deployments
    4. Packaged defaults (emoji_chat/resources/config.yml)

Expected layout::

    shortcuts:
      "100": [hundred]
      smile: [":)", "=)"]
    disable-emojis: false
    disabled-emojis: [":middle_finger:"]
    fix-emoji-coloring: true
    pack-variant: 1

All five keys are required.  A configuration missing any of them is rejected
as a whole by the handler, which then runs with every emoji enabled, no
shortcuts and no color fix-up.
A present value of the wrong shape, such as a list for ``shortcuts``, rejects
the whole file the same way.  A malformed ``pack-variant`` only falls back to
the default pack.  String booleans accept true, yes, 1, on and enabled.

Usage:
    from emoji_chat.config import EmojiChatConfig, load_config, validate_config

    data = load_config()
    if not validate_config(data):
        cfg = EmojiChatConfig.from_dict(data)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path
from typing import Any

import yaml

from emoji_chat.packs import PackVariant

logger = logging.getLogger(__name__)

# =============================================================================
# PATH CONFIGURATION
# =============================================================================

# Project root directory (contains src/, config/)
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Config file paths
CONFIG_DIR = PROJECT_ROOT / "config"
CONFIG_FILE = CONFIG_DIR / "emojichat.yml"
DEFAULT_CONFIG_RESOURCE = "resources/config.yml"

CONFIG_ENV_VAR = "EMOJICHAT_CONFIG"

# =============================================================================
# KEYS
# =============================================================================

SHORTCUTS_KEY = "shortcuts"
DISABLED_EMOJIS_KEY = "disabled-emojis"
DISABLE_EMOJIS_KEY = "disable-emojis"
FIX_COLORING_KEY = "fix-emoji-coloring"
PACK_VARIANT_KEY = "pack-variant"

REQUIRED_KEYS: tuple[str, ...] = (
    SHORTCUTS_KEY,
    DISABLED_EMOJIS_KEY,
    FIX_COLORING_KEY,
    DISABLE_EMOJIS_KEY,
    PACK_VARIANT_KEY,
)


class ConfigError(ValueError):
    """Raised when a present configuration value has the wrong shape."""


# =============================================================================
# CONFIGURATION DATACLASS
# =============================================================================


@dataclass(frozen=True)
class EmojiChatConfig:
    """Immutable, typed view of a validated configuration mapping.

    Attributes:
        shortcuts:          Alias lists grouped by token name (without the
                            ``:`` delimiters).
        disabled_emojis:    Token names whose glyphs must not be produced.
                            Entries may be ``None`` when the YAML list holds
                            an empty item; those are reported and skipped.
        disable_emojis:     Master switch for ``disabled_emojis``.
        fix_emoji_coloring: Whether the chat color fix-up pass runs.

    ``pack-variant`` is not part of this view.  It is read on its own by
    :func:`read_pack_variant`, before validation, so that it applies even
    when the rest of the file is rejected.
    """

    shortcuts: dict[str, list[str]] = field(default_factory=dict)
    disabled_emojis: list[str | None] = field(default_factory=list)
    disable_emojis: bool = False
    fix_emoji_coloring: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> EmojiChatConfig:
        """Parse a configuration mapping.

        Call :func:`validate_config` first; this method assumes every
        required key is present.

        Raises:
            ConfigError: If a value cannot be interpreted.
        """
        return cls(
            shortcuts=_parse_shortcuts(data[SHORTCUTS_KEY]),
            disabled_emojis=_parse_disabled(data[DISABLED_EMOJIS_KEY]),
            disable_emojis=_parse_bool(data[DISABLE_EMOJIS_KEY]),
            fix_emoji_coloring=_parse_bool(data[FIX_COLORING_KEY]),
        )

    @classmethod
    def defaults(cls) -> EmojiChatConfig:
        """Return the state used when no valid configuration was loaded."""
        return cls()


# =============================================================================
# PARSING HELPERS
# =============================================================================


def _parse_bool(value: Any) -> bool:
    """Parse a YAML scalar to boolean; strings use the usual truthy words."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1", "on", "enabled")
    return bool(value)


def _parse_int(value: Any, key: str) -> int:
    """Parse a YAML scalar to int."""
    if isinstance(value, bool):
        raise ConfigError(f"'{key}' must be an integer, got a boolean.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'{key}' must be an integer, got {value!r}.") from exc


def _parse_string_list(value: Any, key: str) -> list[str]:
    """Parse an alias list; a single string counts as a one-element list."""
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list | tuple):
        return [str(item) for item in value if item is not None]
    raise ConfigError(f"'{key}' must be a list of strings, got {type(value).__name__}.")


def _parse_shortcuts(value: Any) -> dict[str, list[str]]:
    if not isinstance(value, Mapping):
        raise ConfigError(f"'{SHORTCUTS_KEY}' must be a mapping of token names to alias lists.")
    return {
        str(name): _parse_string_list(aliases, f"{SHORTCUTS_KEY}.{name}")
        for name, aliases in value.items()
    }


def _parse_disabled(value: Any) -> list[str | None]:
    if not isinstance(value, list | tuple):
        raise ConfigError(f"'{DISABLED_EMOJIS_KEY}' must be a list of token names.")
    return [None if item is None else str(item) for item in value]


# =============================================================================
# VALIDATION
# =============================================================================


def validate_config(data: Any) -> list[str]:
    """Return the required keys that are missing from *data*.

    A key whose value is ``null`` counts as missing.  If *data* cannot be
    inspected at all (it is not a mapping), every required key is reported.

    Returns:
        Missing key names; an empty list means the configuration is complete.
    """
    try:
        return [key for key in REQUIRED_KEYS if data.get(key) is None]
    except (AttributeError, TypeError):
        return list(REQUIRED_KEYS)


def read_pack_variant(data: Any) -> PackVariant:
    """Resolve the ``pack-variant`` entry of *data*.

    This is read even when the rest of the configuration is invalid, so
    that a broken ``shortcuts`` section does not change the glyph run.

    Returns:
        The configured variant, or :attr:`PackVariant.UNRESOLVED` if the
        entry is missing, malformed or names no variant.
    """
    try:
        raw = data.get(PACK_VARIANT_KEY)
    except (AttributeError, TypeError):
        return PackVariant.UNRESOLVED
    if raw is None:
        return PackVariant.UNRESOLVED
    try:
        return PackVariant.from_id(_parse_int(raw, PACK_VARIANT_KEY))
    except ConfigError:
        return PackVariant.UNRESOLVED


# =============================================================================
# CONFIGURATION LOADING
# =============================================================================


def resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Pick the configuration file to read.

    Returns:
        The first candidate that applies, or ``None`` to use the packaged
        defaults.
    """
    if path is not None:
        return Path(path)
    if env_path := os.getenv(CONFIG_ENV_VAR):
        return Path(env_path)
    if CONFIG_FILE.exists():
        return CONFIG_FILE
    return None


def load_config(path: Path | str | None = None) -> Any:
    """
    Load the raw configuration mapping.

    Priority (highest wins):
        1. *path*
        2. ``EMOJICHAT_CONFIG``
        3. config/emojichat.yml
        4. packaged resources/config.yml

    A selected file that does not exist yields ``{}``, which fails
    validation and puts the handler in its default state.  The YAML
    document is returned as parsed, even if it is not a mapping, so that
    :func:`validate_config` can report it.

    Raises:
        yaml.YAMLError: If the file is not valid YAML.
        OSError: If the file exists but cannot be read.
    """
    config_path = resolve_config_path(path)
    if config_path is None:
        text = files("emoji_chat").joinpath(DEFAULT_CONFIG_RESOURCE).read_text(encoding="utf-8")
        return yaml.safe_load(text) or {}

    if not config_path.exists():
        logger.warning("Config file %s not found; using an empty configuration.", config_path)
        return {}
    with config_path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_config_status(path: Path | str | None = None) -> dict:
    """
    Get configuration status for diagnostics.

    Returns a dictionary with configuration source information,
    useful for debugging and admin dashboards.
    """
    config_path = resolve_config_path(path)
    return {
        "config_file_path": str(config_path) if config_path else None,
        "config_file_exists": bool(config_path and config_path.exists()),
        "using_packaged_defaults": config_path is None,
        "env_override": os.getenv(CONFIG_ENV_VAR),
    }
