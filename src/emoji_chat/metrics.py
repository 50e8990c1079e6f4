"""Emoji usage counters.

The handler reports, for every substitution pass, how many occurrences of
each key it found before replacing them.  :class:`UsageMetrics` keeps the
running totals in memory; shipping them somewhere is up to the host, for
example by serving :meth:`UsageMetrics.render_text` on a scrape endpoint.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Protocol


class MetricsSink(Protocol):
    """What the handler needs from a metrics collector."""

    def add_emoji_used(self, count: int) -> None: ...

    def add_shortcut_used(self, count: int) -> None: ...


@dataclass(frozen=True)
class MetricDefinition:
    name: str
    description: str


EMOJIS_USED = MetricDefinition(
    "emojichat_emojis_used_total", "Emoji tokens replaced with glyphs."
)
SHORTCUTS_USED = MetricDefinition(
    "emojichat_shortcuts_used_total", "Shortcut aliases expanded to emoji tokens."
)


class UsageMetrics:
    """Thread-safe in-memory usage counters."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {EMOJIS_USED.name: 0, SHORTCUTS_USED.name: 0}

    def add_emoji_used(self, count: int) -> None:
        self._add(EMOJIS_USED.name, count)

    def add_shortcut_used(self, count: int) -> None:
        self._add(SHORTCUTS_USED.name, count)

    def _add(self, name: str, count: int) -> None:
        if count <= 0:
            return
        with self._lock:
            self._counts[name] += count

    @property
    def emojis_used(self) -> int:
        return self._counts[EMOJIS_USED.name]

    @property
    def shortcuts_used(self) -> int:
        return self._counts[SHORTCUTS_USED.name]

    def snapshot(self) -> dict[str, int]:
        """Return a copy of all counters keyed by metric name."""
        with self._lock:
            return dict(self._counts)

    def reset(self) -> None:
        with self._lock:
            for name in self._counts:
                self._counts[name] = 0

    def render_text(self) -> str:
        """Render the counters in the Prometheus text exposition format."""
        counts = self.snapshot()
        lines: list[str] = []
        for definition in (EMOJIS_USED, SHORTCUTS_USED):
            lines.extend(
                [
                    f"# HELP {definition.name} {definition.description}",
                    f"# TYPE {definition.name} counter",
                    f"{definition.name} {counts[definition.name]}",
                ]
            )
        return "\n".join(lines) + "\n"


class NullMetrics:
    """Metrics sink that discards everything."""

    def add_emoji_used(self, count: int) -> None:
        return None

    def add_shortcut_used(self, count: int) -> None:
        return None
