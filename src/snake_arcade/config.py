"""Typed game configuration with validation and JSON persistence."""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

from snake_arcade.candy import (
    DEFAULT_PROFILES,
    DEFAULT_WEIGHTS,
    CandyProfile,
    CandyType,
    validate_weights,
)
from snake_arcade.errors import ConfigurationError

logger = logging.getLogger(__name__)

_INT_FIELDS = (
    "grid_width",
    "grid_height",
    "point_size",
    "initial_snake_length",
    "initial_growth_pending",
    "collision_tolerance",
)


@dataclass(frozen=True)
class GameConfig:
    """All tunable settings of a single-player game.

    Validated on construction; a bad value raises
    :class:`~snake_arcade.errors.ConfigurationError`.
    """

    # Grid
    grid_width: int = 30
    grid_height: int = 20

    # Timing
    frame_interval_ms: float = 100
    game_over_shed_interval_ms: float = 70
    game_over_reset_delay_ms: float = 1000

    # Rendering only; the engine ignores it.
    point_size: int = 16

    # Snake
    initial_snake_length: int = 3
    initial_growth_pending: int = 0
    collision_tolerance: int = 0

    # Candy
    candy_weights: dict[CandyType, float] = field(
        default_factory=lambda: dict(DEFAULT_WEIGHTS),
    )
    candy_profiles: dict[CandyType, CandyProfile] = field(
        default_factory=lambda: dict(DEFAULT_PROFILES),
    )

    auto_restart: bool = False
    seed: int | None = None

    def __post_init__(self) -> None:
        for name in _INT_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(
                    f"{name} must be an integer, got {value!r}.",
                )
        if self.grid_width < 1 or self.grid_height < 1:
            raise ConfigurationError(
                "grid_width and grid_height must be positive.",
            )
        for name in (
            "frame_interval_ms",
            "game_over_shed_interval_ms",
            "game_over_reset_delay_ms",
        ):
            value = getattr(self, name)
            if (
                isinstance(value, bool)
                or not isinstance(value, (int, float))
                or not math.isfinite(value)
                or value <= 0
            ):
                raise ConfigurationError(f"{name} must be positive, got {value!r}.")
        if self.point_size < 1:
            raise ConfigurationError("point_size must be at least 1.")
        if self.initial_snake_length < 1:
            raise ConfigurationError("initial_snake_length must be at least 1.")
        if self.initial_snake_length > self.grid_width:
            raise ConfigurationError(
                "initial_snake_length does not fit the grid width; "
                "increase grid_width or reduce the length.",
            )
        if self.initial_growth_pending < 0:
            raise ConfigurationError("initial_growth_pending must be >= 0.")
        if self.collision_tolerance < 0:
            raise ConfigurationError("collision_tolerance must be >= 0.")

        validate_weights(self.candy_weights)
        missing = [t.value for t in self.candy_weights if t not in self.candy_profiles]
        if missing:
            raise ConfigurationError(
                f"No candy profile configured for: {', '.join(missing)}.",
            )

    @property
    def frame_interval(self) -> float:
        """Frame interval in seconds."""
        return self.frame_interval_ms / 1000.0

    @property
    def game_over_shed_interval(self) -> float:
        return self.game_over_shed_interval_ms / 1000.0

    @property
    def game_over_reset_delay(self) -> float:
        return self.game_over_reset_delay_ms / 1000.0

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> GameConfig:
        """Build a config from a flat mapping of option names.

        Candy weights and profiles are keyed by type name, e.g.
        ``{"candy_weights": {"regular": 1.0}}``. Options left out keep
        their defaults.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration option(s): {', '.join(unknown)}.",
            )

        raw = dict(mapping)
        if "candy_weights" in raw:
            try:
                raw["candy_weights"] = {
                    _candy_type(name): float(weight)
                    for name, weight in raw["candy_weights"].items()
                }
            except ConfigurationError:
                raise
            except (AttributeError, TypeError, ValueError) as exc:
                raise ConfigurationError(
                    f"Invalid candy_weights: {exc}",
                ) from exc
        if "candy_profiles" in raw:
            if not isinstance(raw["candy_profiles"], Mapping):
                raise ConfigurationError(
                    "candy_profiles must map candy types to profiles.",
                )
            profiles = dict(DEFAULT_PROFILES)
            for name, values in raw["candy_profiles"].items():
                try:
                    profiles[_candy_type(name)] = CandyProfile(**values)
                except TypeError as exc:
                    raise ConfigurationError(
                        f"Invalid candy profile for {name!r}: {exc}",
                    ) from exc
            raw["candy_profiles"] = profiles
        try:
            return cls(**raw)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

    def to_dict(self) -> dict:
        """Serialize to a plain, JSON-friendly dict."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["candy_weights"] = {
            t.value: weight for t, weight in self.candy_weights.items()
        }
        data["candy_profiles"] = {
            t.value: {f.name: getattr(p, f.name) for f in fields(p)}
            for t, p in self.candy_profiles.items()
        }
        return data

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        if not isinstance(raw, dict):
            raise ConfigurationError(f"Config file {path} must hold a JSON object.")
        return cls.from_mapping(raw)


def _candy_type(name: str | CandyType) -> CandyType:
    if isinstance(name, CandyType):
        return name
    try:
        return CandyType(name.lower())
    except ValueError:
        raise ConfigurationError(f"Unknown candy type: {name!r}.") from None
