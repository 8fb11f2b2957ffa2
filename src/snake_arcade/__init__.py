"""Snake Arcade: grid snake game simulation engine."""

from snake_arcade.candy import Candy, CandyProfile, CandySpawner, CandyType
from snake_arcade.clock import AsyncioClock, Clock, ManualClock
from snake_arcade.config import GameConfig
from snake_arcade.controls import InputSource, LastDirectionInput, RandomInput
from snake_arcade.direction import Direction, is_opposite, resolve_next
from snake_arcade.engine import GameEngine, GameState, Phase, Snapshot
from snake_arcade.errors import ConfigurationError
from snake_arcade.grid import Grid, Point
from snake_arcade.sinks import RecordingSink, RenderSink
from snake_arcade.snake import Snake

__all__ = [
    "AsyncioClock",
    "Candy",
    "CandyProfile",
    "CandySpawner",
    "CandyType",
    "Clock",
    "ConfigurationError",
    "Direction",
    "GameConfig",
    "GameEngine",
    "GameState",
    "Grid",
    "InputSource",
    "LastDirectionInput",
    "ManualClock",
    "Phase",
    "Point",
    "RandomInput",
    "RecordingSink",
    "RenderSink",
    "Snake",
    "Snapshot",
    "is_opposite",
    "resolve_next",
]
