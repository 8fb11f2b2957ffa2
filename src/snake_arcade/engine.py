"""Frame-based game engine composing grid, snake and candy logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

import numpy as np

from snake_arcade.candy import Candy, CandySpawner, CandyType
from snake_arcade.clock import Clock, ManualClock, TimerHandle
from snake_arcade.config import GameConfig
from snake_arcade.controls import InputSource
from snake_arcade.direction import Direction, resolve_next
from snake_arcade.grid import Grid, Point
from snake_arcade.sinks import RenderSink
from snake_arcade.snake import Snake

logger = logging.getLogger(__name__)


class Phase(str, enum.Enum):
    """Lifecycle phases of a game."""

    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"


@dataclass
class GameState:
    """Everything that changes during a game. Written only by the engine."""

    grid: Grid
    snake: Snake
    candy: Candy | None
    score: int = 0
    high_score: int = 0
    phase: Phase = Phase.READY
    frame: int = 0
    tolerance_left: int = 0


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the game handed to render sinks."""

    snake_body: tuple[Point, ...]
    direction: Direction
    alive: bool
    growth_pending: int
    candy_position: Point | None
    candy_type: CandyType | None
    candy_size: float | None
    score: int
    high_score: int
    phase: Phase
    frame: int
    tolerance_left: int

    @property
    def head(self) -> Point:
        return self.snake_body[0]

    def to_dict(self) -> dict:
        """Return the snapshot as a JSON-serializable dict."""
        candy = None
        if self.candy_position is not None:
            candy = {
                "position": list(self.candy_position),
                "type": self.candy_type.value if self.candy_type else None,
                "size": self.candy_size,
            }
        return {
            "frame": self.frame,
            "phase": self.phase.value,
            "score": self.score,
            "high_score": self.high_score,
            "snake": {
                "body": [list(p) for p in self.snake_body],
                "direction": self.direction.name.lower(),
                "alive": self.alive,
                "growth_pending": self.growth_pending,
            },
            "candy": candy,
            "tolerance_left": self.tolerance_left,
        }


class GameEngine:
    """Single-snake, frame-based game engine.

    The engine exclusively owns the :class:`GameState`. An injected
    :class:`~snake_arcade.clock.Clock` calls :meth:`tick` once per frame
    while playing; the engine itself only schedules the short timers of
    the game-over animation. Every timer callback carries the generation
    it was scheduled in, so callbacks that outlive a reset do nothing.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        input_source: InputSource | None = None,
        render_sink: RenderSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.input_source = input_source
        self.render_sink = render_sink
        self.clock: Clock = clock if clock is not None else ManualClock()
        self._frame_task: TimerHandle | None = None
        self._game_over_timer: TimerHandle | None = None
        self._generation = 0
        self.initialize(config or GameConfig())

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, config: GameConfig) -> None:
        """Build grid, snake and candy from *config* and enter READY."""
        self._cancel_timers()
        self.config = config
        self.rng = np.random.default_rng(config.seed)
        grid = Grid(width=config.grid_width, height=config.grid_height)
        self.spawner = CandySpawner(
            grid,
            weights=config.candy_weights,
            profiles=config.candy_profiles,
            rng=self.rng,
        )
        snake = self._seed_snake(grid)
        self.state = GameState(
            grid=grid,
            snake=snake,
            candy=self.spawner.spawn(snake.body),
            tolerance_left=config.collision_tolerance,
        )
        logger.info(
            "Game initialized on a %dx%d grid.", grid.width, grid.height,
        )

    @property
    def phase(self) -> Phase:
        return self.state.phase

    def start(self) -> None:
        """Begin playing a game that is READY."""
        if self.state.phase is not Phase.READY:
            logger.debug("Ignoring start() in phase %s.", self.state.phase.value)
            return
        self.state.phase = Phase.PLAYING
        self._schedule_frames()
        logger.info("Game started.")

    def pause(self) -> None:
        """Suspend frame ticks."""
        if self.state.phase is not Phase.PLAYING:
            logger.debug("Ignoring pause() in phase %s.", self.state.phase.value)
            return
        self.state.phase = Phase.PAUSED
        self._cancel_frame_task()
        self._emit()

    def resume(self) -> None:
        """Resume a paused game."""
        if self.state.phase is not Phase.PAUSED:
            logger.debug("Ignoring resume() in phase %s.", self.state.phase.value)
            return
        self.state.phase = Phase.PLAYING
        self._schedule_frames()

    def reset(self) -> None:
        """Abandon the current game and return to READY.

        Cancels any frame task or game-over animation in flight. The high
        score survives the reset.
        """
        self._cancel_timers()
        state = self.state
        state.snake = self._seed_snake(state.grid)
        state.candy = self.spawner.spawn(state.snake.body)
        state.score = 0
        state.frame = 0
        state.tolerance_left = self.config.collision_tolerance
        state.phase = Phase.READY
        logger.info("Game reset (high score %d).", state.high_score)
        self._emit()

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def tick(self) -> Snapshot:
        """Advance the game by one frame.

        Does nothing unless the game is PLAYING. Returns the resulting
        snapshot.
        """
        state = self.state
        if state.phase is not Phase.PLAYING:
            return self.get_state()

        snake = state.snake
        desired = (
            self.input_source.get_desired_direction()
            if self.input_source is not None else None
        )
        direction = resolve_next(snake.direction, desired, len(snake))
        candidate = state.grid.wrap(snake.head.shifted(direction.dx, direction.dy))
        state.frame += 1

        moved = False
        if snake.collides_at(candidate, simulate_tail_removal=True):
            if state.tolerance_left <= 0:
                self._game_over()
                return self._emit()
            state.tolerance_left -= 1
            logger.debug(
                "Collision at %s tolerated (%d frame(s) left).",
                candidate, state.tolerance_left,
            )
        else:
            state.tolerance_left = self.config.collision_tolerance
            snake.advance(candidate)
            snake.direction = direction
            moved = True

        if state.candy is not None and not state.candy.age():
            logger.debug("Candy at %s expired.", state.candy.position)
            state.candy = self.spawner.spawn(snake.body)

        if moved and state.candy is not None and state.candy.position == candidate:
            self._eat(state.candy)

        return self._emit()

    def get_state(self) -> Snapshot:
        """Return a read-only snapshot of the current game."""
        state = self.state
        candy = state.candy
        return Snapshot(
            snake_body=tuple(state.snake.body),
            direction=state.snake.direction,
            alive=state.snake.alive,
            growth_pending=state.snake.growth_pending,
            candy_position=candy.position if candy else None,
            candy_type=candy.type if candy else None,
            candy_size=candy.size if candy else None,
            score=state.score,
            high_score=state.high_score,
            phase=state.phase,
            frame=state.frame,
            tolerance_left=state.tolerance_left,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _seed_snake(self, grid: Grid) -> Snake:
        seed = Snake.seeded(
            grid.center,
            Direction.RIGHT,
            length=self.config.initial_snake_length,
            growth_pending=self.config.initial_growth_pending,
        )
        return Snake(
            (grid.wrap(p) for p in seed.body),
            seed.direction,
            seed.growth_pending,
        )

    def _eat(self, candy: Candy) -> None:
        state = self.state
        state.score += candy.score
        state.high_score = max(state.high_score, state.score)
        state.snake.grow(candy.growth)
        logger.debug(
            "Ate %s candy at %s (score %d).",
            candy.type.value, candy.position, state.score,
        )
        state.candy = self.spawner.spawn(state.snake.body)

    def _game_over(self) -> None:
        state = self.state
        state.snake.alive = False
        state.phase = Phase.GAME_OVER
        self._cancel_frame_task()
        logger.info(
            "Snake died at frame %d with score %d.", state.frame, state.score,
        )
        self._schedule_game_over_step()

    def _schedule_game_over_step(self) -> None:
        generation = self._generation
        if len(self.state.snake) > 1:
            self._game_over_timer = self.clock.call_later(
                self.config.game_over_shed_interval,
                lambda: self._shed_tail(generation),
            )
        else:
            self._game_over_timer = self.clock.call_later(
                self.config.game_over_reset_delay,
                lambda: self._finish_game_over(generation),
            )

    def _shed_tail(self, generation: int) -> None:
        if generation != self._generation or self.state.phase is not Phase.GAME_OVER:
            return
        self.state.snake.shed_tail()
        self._emit()
        self._schedule_game_over_step()

    def _finish_game_over(self, generation: int) -> None:
        if generation != self._generation or self.state.phase is not Phase.GAME_OVER:
            return
        self._game_over_timer = None
        self.reset()
        if self.config.auto_restart:
            self.start()

    def _schedule_frames(self) -> None:
        self._cancel_frame_task()
        self._frame_task = self.clock.call_every(self.config.frame_interval, self.tick)

    def _cancel_frame_task(self) -> None:
        if self._frame_task is not None:
            self._frame_task.cancel()
            self._frame_task = None

    def _cancel_timers(self) -> None:
        self._cancel_frame_task()
        if self._game_over_timer is not None:
            self._game_over_timer.cancel()
            self._game_over_timer = None
        self._generation += 1

    def _emit(self) -> Snapshot:
        snapshot = self.get_state()
        if self.render_sink is not None:
            self.render_sink.render(snapshot)
        return snapshot
