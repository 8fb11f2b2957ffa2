"""Render sinks that receive engine snapshots."""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from snake_arcade.engine import Snapshot


class RenderSink(Protocol):
    """One-way receiver of frame snapshots."""

    def render(self, snapshot: Snapshot) -> None: ...


class RecordingSink:
    """Keeps emitted snapshots in memory, optionally only the latest *maxlen*."""

    def __init__(self, maxlen: int | None = None) -> None:
        self.snapshots: deque[Snapshot] = deque(maxlen=maxlen)

    def render(self, snapshot: Snapshot) -> None:
        self.snapshots.append(snapshot)

    @property
    def last(self) -> Snapshot | None:
        return self.snapshots[-1] if self.snapshots else None

    def clear(self) -> None:
        self.snapshots.clear()

    def __len__(self) -> int:
        return len(self.snapshots)
