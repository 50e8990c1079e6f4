"""Tests for dynamic version management.

Verifies that ``emoji_chat.__version__`` is correctly resolved from the
installed package metadata (``pyproject.toml``).
"""

from __future__ import annotations

import re
from importlib.metadata import version

import pytest

import emoji_chat

# Matches semver-ish strings: major.minor.patch with optional pre-release
# suffix (e.g. "1.7.0", "1.0.0-rc.1", "0.0.0-dev").
_SEMVER_RE = re.compile(
    r"^\d+\.\d+\.\d+"  # major.minor.patch
    r"(-[A-Za-z0-9]+(\.[A-Za-z0-9]+)*)?$"  # optional pre-release
)


@pytest.mark.unit
class TestVersionAttribute:
    """Verify the ``emoji_chat.__version__`` package attribute."""

    def test_version_is_a_string(self) -> None:
        assert isinstance(emoji_chat.__version__, str)
        assert len(emoji_chat.__version__) > 0

    def test_version_matches_semver(self) -> None:
        assert _SEMVER_RE.match(emoji_chat.__version__), (
            f"__version__ {emoji_chat.__version__!r} does not match "
            f"expected semver pattern (major.minor.patch[-prerelease])"
        )

    def test_version_matches_metadata(self) -> None:
        """__version__ must agree with the installed distribution metadata."""
        assert emoji_chat.__version__ == version("emoji_chat")

    def test_public_surface(self) -> None:
        for name in emoji_chat.__all__:
            assert hasattr(emoji_chat, name)
