"""Input sources sampled by the engine once per frame."""

from __future__ import annotations

from typing import Protocol

import numpy as np

from snake_arcade.direction import Direction


class InputSource(Protocol):
    """Anything that can report the player's latest desired heading."""

    def get_desired_direction(self) -> Direction | None: ...


class LastDirectionInput:
    """Single-slot input: every key press overwrites the previous one.

    Presses are not queued. If the player hits several keys between two
    frames only the last one is seen by the engine.
    """

    def __init__(self, initial: Direction | None = None) -> None:
        self._last = initial

    def press(self, direction: Direction) -> None:
        self._last = direction

    def press_key(self, key: str) -> bool:
        """Record a key by name. Returns False for keys that are not arrows."""
        try:
            self._last = Direction.from_name(key)
        except ValueError:
            return False
        return True

    def clear(self) -> None:
        self._last = None

    def get_desired_direction(self) -> Direction | None:
        return self._last


class RandomInput:
    """Headless player that turns at random.

    Each frame it keeps its previous choice unless a draw below
    *turn_probability* picks a new random direction.
    """

    def __init__(
        self,
        turn_probability: float = 0.2,
        rng: np.random.Generator | None = None,
    ) -> None:
        if not 0.0 <= turn_probability <= 1.0:
            raise ValueError("turn_probability must be within [0, 1].")
        self.turn_probability = turn_probability
        self.rng = rng if rng is not None else np.random.default_rng()
        self._directions = list(Direction)
        self._last: Direction | None = None

    def get_desired_direction(self) -> Direction | None:
        if self.rng.random() < self.turn_probability:
            self._last = self._directions[int(self.rng.integers(len(self._directions)))]
        return self._last
