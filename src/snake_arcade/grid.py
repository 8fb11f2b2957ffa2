"""Grid geometry for the snake game."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

import numpy as np

from snake_arcade.errors import ConfigurationError


class Point(NamedTuple):
    """An immutable grid coordinate.

    ``x`` grows to the right and ``y`` grows downward.
    """

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> Point:
        """Return the point offset by ``(dx, dy)``, without wrapping."""
        return Point(self.x + dx, self.y + dy)


class Grid:
    """Bounded grid with wraparound arithmetic.

    The grid owns no mutable state: every method is a pure function of
    its arguments and the grid dimensions.
    """

    __slots__ = ("width", "height")

    def __init__(self, width: int = 30, height: int = 20) -> None:
        if width < 1 or height < 1:
            raise ConfigurationError(
                f"Grid dimensions must be positive, got {width}x{height}.",
            )
        self.width = width
        self.height = height

    @property
    def center(self) -> Point:
        return Point(self.width // 2, self.height // 2)

    def contains(self, point: Point) -> bool:
        """Check whether a coordinate lies within the grid."""
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def wrap(self, point: Point) -> Point:
        """Wrap a coordinate around the grid edges.

        Uses true modulo arithmetic, so ``-1`` on an extent of 10 becomes 9
        and 23 becomes 3.
        """
        return Point(point.x % self.width, point.y % self.height)

    def free_cells(self, occupied: Iterable[Point]) -> list[Point]:
        """Return every in-bounds cell not listed in *occupied*.

        Cells are ordered row by row. Out-of-bounds entries in *occupied*
        are ignored.
        """
        mask = np.ones((self.height, self.width), dtype=bool)
        for x, y in occupied:
            if 0 <= x < self.width and 0 <= y < self.height:
                mask[y, x] = False
        ys, xs = np.nonzero(mask)
        return [Point(x, y) for x, y in zip(xs.tolist(), ys.tolist(), strict=True)]

    def __repr__(self) -> str:
        return f"Grid(width={self.width}, height={self.height})"
