"""Token dictionary construction.

The token list is a plain-text resource with one token per line, in the
order the glyphs were laid out in the resource pack.  Each token is given
the next code point of the active :class:`~emoji_chat.packs.PackVariant`
run, starting with the variant's start code point.

Format of ``resources/list.txt``::

    # comments start with a hash and are ignored
    :100:
    :1234:
    :grinning:

Comment lines do not consume a code point.  A blank line does, but it
adds no token.  The resulting dictionary is ordered by token (ascending),
which is the order the substitution pass walks it in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from importlib.resources import files
from pathlib import Path

from emoji_chat.packs import PackVariant

logger = logging.getLogger(__name__)

#: Lines starting with this marker are ignored.
COMMENT_MARKER = "#"

#: Packaged token list, relative to the ``emoji_chat`` package.
TOKEN_LIST_RESOURCE = "resources/list.txt"


def read_token_lines(source: Path | str | None = None) -> list[str]:
    """Read the raw lines of a token list.

    Args:
        source: Path to a token list file.  ``None`` reads the packaged
                ``resources/list.txt``.

    Returns:
        The file's lines with line terminators removed.

    Raises:
        OSError: If the source cannot be read.  The handler catches this
                 and continues with an empty dictionary.
    """
    if source is None:
        text = files("emoji_chat").joinpath(TOKEN_LIST_RESOURCE).read_text(encoding="utf-8")
    else:
        text = Path(source).read_text(encoding="utf-8")
    return text.splitlines()


def iter_token_lines(lines: Iterable[str]) -> Iterable[str]:
    """Yield every non-comment line of *lines*, blanks included, unterminated."""
    for line in lines:
        line = line.rstrip("\r\n")
        if line.startswith(COMMENT_MARKER):
            continue
        yield line


def build_emoji_dictionary(variant: PackVariant, lines: Iterable[str]) -> dict[str, str]:
    """Assign a glyph to every token in *lines*.

    The k-th non-comment line gets ``chr(variant.start_codepoint + k - 1)``.  A
    token listed twice keeps the later glyph; both occurrences consume a
    code point.  A blank line consumes one too but is not a token.  No
    upper bound is enforced on the run.

    Args:
        variant: A resolved pack variant.
        lines:   Raw token list lines (see module docstring for the format).

    Returns:
        ``{token: glyph}`` ordered by token.

    Raises:
        ValueError: If *variant* is :attr:`PackVariant.UNRESOLVED`.
    """
    codepoint = variant.start_codepoint
    assigned: dict[str, str] = {}
    for token in iter_token_lines(lines):
        if token:
            assigned[token] = chr(codepoint)
        codepoint += 1
    return dict(sorted(assigned.items()))
