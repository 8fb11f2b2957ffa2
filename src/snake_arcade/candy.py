"""Candy types, aging and spawning logic."""

from __future__ import annotations

import enum
import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.errors import ConfigurationError

if TYPE_CHECKING:
    from snake_arcade.grid import Grid, Point

logger = logging.getLogger(__name__)


class CandyType(enum.Enum):
    """Kinds of candy the snake can eat."""

    REGULAR = "regular"
    MASSIVE = "massive"
    SHRINKING = "shrinking"


@dataclass(frozen=True)
class CandyProfile:
    """Fixed effects of one candy type.

    ``size`` is measured in cells. Types with a positive ``decay_rate``
    lose that much size every frame and expire once below ``min_size``.
    """

    score: int
    growth: int
    size: float = 0.3
    decay_rate: float = 0.0
    min_size: float = 0.0

    def __post_init__(self) -> None:
        if self.growth < 0:
            raise ConfigurationError("Candy growth must be >= 0.")
        if self.decay_rate < 0:
            raise ConfigurationError("Candy decay_rate must be >= 0.")
        if self.size <= 0 or self.size < self.min_size:
            raise ConfigurationError(
                "Candy size must be positive and at least min_size.",
            )

    @property
    def decays(self) -> bool:
        return self.decay_rate > 0


DEFAULT_PROFILES: dict[CandyType, CandyProfile] = {
    CandyType.REGULAR: CandyProfile(score=5, growth=3, size=0.3),
    CandyType.MASSIVE: CandyProfile(score=15, growth=5, size=0.45),
    CandyType.SHRINKING: CandyProfile(
        score=50, growth=3, size=0.45, decay_rate=0.008, min_size=0.05,
    ),
}

DEFAULT_WEIGHTS: dict[CandyType, float] = {
    CandyType.REGULAR: 0.75,
    CandyType.MASSIVE: 0.20,
    CandyType.SHRINKING: 0.05,
}


class Candy:
    """A single collectible placed on the grid."""

    __slots__ = ("position", "type", "profile", "size")

    def __init__(
        self,
        position: Point,
        candy_type: CandyType = CandyType.REGULAR,
        profile: CandyProfile | None = None,
    ) -> None:
        self.position = position
        self.type = candy_type
        self.profile = profile if profile is not None else DEFAULT_PROFILES[candy_type]
        self.size = self.profile.size

    @property
    def score(self) -> int:
        return self.profile.score

    @property
    def growth(self) -> int:
        return self.profile.growth

    def age(self) -> bool:
        """Age the candy by one frame.

        Returns False once a decaying candy has shrunk below its minimum
        size and must be replaced. Non-decaying candy never expires.
        """
        if not self.profile.decays:
            return True
        self.size -= self.profile.decay_rate
        return self.size >= self.profile.min_size

    def __repr__(self) -> str:
        return f"Candy({self.position!r}, {self.type.name}, size={self.size:.3f})"


def validate_weights(weights: Mapping[CandyType, float]) -> None:
    """Reject weight tables that cannot drive a weighted draw."""
    if not weights:
        raise ConfigurationError("At least one candy weight is required.")
    for candy_type, weight in weights.items():
        if not math.isfinite(weight) or weight < 0:
            raise ConfigurationError(
                f"Candy weight for {candy_type.value!r} must be a finite "
                f"number >= 0, got {weight!r}.",
            )
    if sum(weights.values()) <= 0:
        raise ConfigurationError("Candy weights must sum to a positive total.")


class CandySpawner:
    """Places candy on free cells with a weighted choice of type.

    Uses a seeded NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        grid: Grid,
        weights: Mapping[CandyType, float] | None = None,
        profiles: Mapping[CandyType, CandyProfile] | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        weights = dict(weights if weights is not None else DEFAULT_WEIGHTS)
        profiles = dict(profiles if profiles is not None else DEFAULT_PROFILES)
        validate_weights(weights)
        missing = [t.value for t in weights if t not in profiles]
        if missing:
            raise ConfigurationError(
                f"No candy profile configured for: {', '.join(missing)}.",
            )

        self.grid = grid
        self.profiles = profiles
        self.rng = rng if rng is not None else np.random.default_rng()
        self._types = list(weights)
        total = sum(weights.values())
        self._probabilities = np.array([weights[t] / total for t in self._types])

    def choose_type(self) -> CandyType:
        """Draw a candy type according to the configured weights."""
        idx = self.rng.choice(len(self._types), p=self._probabilities)
        return self._types[int(idx)]

    def spawn(self, occupied: Iterable[Point]) -> Candy | None:
        """Create a candy on a uniformly random cell outside *occupied*.

        Returns ``None`` when no free cell is left.
        """
        free = self.grid.free_cells(occupied)
        if not free:
            logger.warning("No free cells available for candy spawning.")
            return None

        position = free[int(self.rng.integers(len(free)))]
        candy_type = self.choose_type()
        candy = Candy(position, candy_type, self.profiles[candy_type])
        logger.debug("Spawned %r.", candy)
        return candy
