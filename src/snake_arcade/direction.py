"""Four-way heading model and reversal policy."""

from __future__ import annotations

import enum


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downward, so ``UP`` decrements it.
    """

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    @property
    def opposite(self) -> Direction:
        return Direction((-self.dx, -self.dy))

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Look up a direction by name or common key alias.

        Accepts ``"up"``, ``"arrowup"``, ``"w"`` and friends, in any case.
        """
        key = name.strip().lower()
        try:
            return _KEY_ALIASES[key]
        except KeyError:
            raise ValueError(f"Unknown direction name: {name!r}") from None


_KEY_ALIASES: dict[str, Direction] = {}
for _direction in Direction:
    _label = _direction.name.lower()
    _KEY_ALIASES[_label] = _direction
    _KEY_ALIASES[f"arrow{_label}"] = _direction
del _direction, _label
_KEY_ALIASES.update(
    {"w": Direction.UP, "a": Direction.LEFT, "s": Direction.DOWN, "d": Direction.RIGHT},
)


def is_opposite(a: Direction, b: Direction) -> bool:
    """Return True if *a* and *b* point opposite ways along one axis."""
    return a.dx + b.dx == 0 and a.dy + b.dy == 0


def resolve_next(
    current: Direction,
    desired: Direction | None,
    body_length: int,
) -> Direction:
    """Pick the heading for the coming frame.

    A reversal is ignored while the snake has more than one segment,
    since it would drive the head straight into its neck. A lone head
    may turn around freely.
    """
    if desired is None:
        return current
    if body_length > 1 and is_opposite(current, desired):
        return current
    return desired
