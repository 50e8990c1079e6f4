"""Config-driven tables carved out of / layered on the token dictionary.

Two tables come from the operator's configuration:

- **Disabled glyphs**: tokens listed under ``disabled-emojis`` are removed
  from the dictionary and their glyphs are remembered, so that messages
  containing those raw glyphs can be rejected.
- **Shortcuts**: the ``shortcuts`` section groups alias strings under a
  token name.  Each alias maps to the delimited token, e.g.::

      shortcuts:
        "100": ["hundred", "one hundred"]
        smile: [":)", "=)"]

  gives ``{"hundred": ":100:", "one hundred": ":100:", ":)": ":smile:", ...}``.

Neither table checks the other.  An alias may point at a disabled or
unknown token; it then expands to the token text and stops there.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

logger = logging.getLogger(__name__)

#: Wraps a shortcut group key into the token it stands for.
TOKEN_DELIMITER = ":"


def delimit(name: object) -> str:
    """Return the delimited token for a shortcut group key."""
    return f"{TOKEN_DELIMITER}{name}{TOKEN_DELIMITER}"


def build_shortcuts(grouped: Mapping[str, Iterable[str]]) -> dict[str, str]:
    """Flatten grouped alias lists into ``{alias: ":key:"}``.

    Iteration order follows the configuration.  An alias listed under two
    keys keeps its first position and the value of the last key.  Empty
    aliases are dropped, since they would match between every character.
    """
    shortcuts: dict[str, str] = {}
    for key, aliases in grouped.items():
        token = delimit(key)
        for alias in aliases:
            if not alias:
                logger.warning("Empty shortcut for '%s' in 'shortcuts'. Skipping...", key)
                continue
            shortcuts[alias] = token
    return shortcuts


def apply_disabled_list(
    emojis: Mapping[str, str], names: Iterable[str | None]
) -> tuple[dict[str, str], tuple[str, ...]]:
    """Remove the named tokens from *emojis* and collect their glyphs.

    Unknown names are skipped with a warning.  The input mapping is not
    modified.

    Args:
        emojis: The freshly built token dictionary.
        names:  Token names from ``disabled-emojis``.

    Returns:
        Tuple of (remaining dictionary, disabled glyphs in *names* order).
    """
    remaining = dict(emojis)
    disabled: list[str] = []
    for name in names:
        if name is None or name not in remaining:
            logger.warning(
                "Invalid emoji specified in 'disabled-emojis': '%s'. Skipping...", name
            )
            continue
        disabled.append(remaining.pop(name))
    return remaining, tuple(disabled)
