"""Emoji pack variants.

A pack variant decides which contiguous run of Unicode code points the
emoji tokens are mapped onto.  The client-side resource pack overrides the
glyphs in that run, so the server and the pack must agree on the variant.

Variants
--------
``KOREAN``   id 1, run starts at U+AC00 (가).  The original, default variant.
``CHINESE``  id 2, run starts at U+5A00 (娀).

``UNRESOLVED`` is what :meth:`PackVariant.from_id` returns for any id that
does not name a real variant.  It carries no start code point; asking for
one raises ``ValueError`` so callers cannot silently build a dictionary
from it.
"""

from __future__ import annotations

from enum import Enum


class PackVariant(Enum):
    """The emoji replacement variant, keyed by its configured integer id."""

    KOREAN = (1, 0xAC00)
    CHINESE = (2, 0x5A00)
    UNRESOLVED = (None, None)

    def __init__(self, variant_id: int | None, start: int | None) -> None:
        self.variant_id = variant_id
        self._start = start

    @property
    def is_resolved(self) -> bool:
        """``False`` only for :attr:`UNRESOLVED`."""
        return self is not PackVariant.UNRESOLVED

    @property
    def start_codepoint(self) -> int:
        """First code point of the run.

        Raises:
            ValueError: For :attr:`UNRESOLVED`, which has no run.
        """
        if self._start is None:
            raise ValueError("Unresolved pack variant has no start code point.")
        return self._start

    @classmethod
    def from_id(cls, variant_id: object) -> PackVariant:
        """Return the variant with *variant_id*, or :attr:`UNRESOLVED`.

        Booleans are not accepted as ids even though ``True == 1``.
        """
        if isinstance(variant_id, bool):
            return cls.UNRESOLVED
        for variant in cls:
            if variant.variant_id is not None and variant.variant_id == variant_id:
                return variant
        return cls.UNRESOLVED


#: Variant used when the configured id does not resolve.
DEFAULT_VARIANT = PackVariant.KOREAN
