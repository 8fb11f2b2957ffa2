"""Snake representation and movement logic."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable

from snake_arcade.direction import Direction
from snake_arcade.grid import Point


class Snake:
    """A snake represented as an ordered deque of grid points.

    The head is ``body[0]``; the tail is ``body[-1]``.
    """

    def __init__(
        self,
        body: Iterable[Point],
        direction: Direction = Direction.RIGHT,
        growth_pending: int = 0,
    ) -> None:
        self.body: deque[Point] = deque(Point(*p) for p in body)
        if not self.body:
            raise ValueError("Snake body must contain at least 1 point.")
        if growth_pending < 0:
            raise ValueError("growth_pending must be >= 0.")
        self.direction = direction
        self.growth_pending = growth_pending
        self.alive = True

    @classmethod
    def seeded(
        cls,
        head: Point,
        direction: Direction = Direction.RIGHT,
        length: int = 3,
        growth_pending: int = 0,
    ) -> Snake:
        """Lay out a straight snake trailing away from its heading."""
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        body = [head.shifted(-direction.dx * i, -direction.dy * i) for i in range(length)]
        return cls(body, direction, growth_pending)

    @property
    def head(self) -> Point:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def tail(self) -> Point:
        return self.body[-1]

    def __len__(self) -> int:
        return len(self.body)

    def collides_at(self, point: Point, simulate_tail_removal: bool = False) -> bool:
        """Check whether *point* overlaps the body.

        With *simulate_tail_removal* the tail is left out of the test,
        because it vacates its cell on the same frame the head moves in.
        Pending growth keeps the tail in place, so it is still tested.
        """
        segments = list(self.body)
        if simulate_tail_removal and self.growth_pending == 0:
            segments = segments[:-1]
        return point in segments

    def advance(self, new_head: Point) -> Point | None:
        """Move the head onto *new_head*.

        Returns the vacated tail cell, or ``None`` if the snake grew.
        """
        self.body.appendleft(new_head)
        if self.growth_pending > 0:
            self.growth_pending -= 1
            return None
        return self.body.pop()

    def grow(self, segments: int = 1) -> None:
        """Queue growth for the next *segments* moves."""
        if segments < 0:
            raise ValueError("Growth must be >= 0.")
        self.growth_pending += segments

    def shed_tail(self) -> Point | None:
        """Drop one tail segment, keeping at least the head."""
        if len(self.body) <= 1:
            return None
        return self.body.pop()
