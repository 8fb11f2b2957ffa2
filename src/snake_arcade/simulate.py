"""Headless and real-time game runners."""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time
from dataclasses import dataclass, field

import numpy as np

from snake_arcade.clock import AsyncioClock, ManualClock
from snake_arcade.config import GameConfig
from snake_arcade.controls import InputSource, RandomInput
from snake_arcade.engine import GameEngine, Phase, Snapshot
from snake_arcade.sinks import RenderSink

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Outcome of a batch of headless games."""

    games: int
    total_frames: int
    wall_time_seconds: float
    scores: list[int] = field(default_factory=list)

    @property
    def best_score(self) -> int:
        return max(self.scores, default=0)

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0

    @property
    def frames_per_second(self) -> float:
        return self.total_frames / max(self.wall_time_seconds, 1e-9)

    def summary(self) -> str:
        return (
            f"Simulation: {self.games} games, {self.total_frames} frames in "
            f"{self.wall_time_seconds:.2f}s | best score {self.best_score}, "
            f"mean score {self.mean_score:.1f}, "
            f"{self.frames_per_second:.1f} frames/s"
        )


def simulate_games(
    config: GameConfig | None = None,
    *,
    num_games: int = 10,
    max_ticks: int = 1_000,
    turn_probability: float = 0.2,
    seed: int | None = None,
) -> SimulationResult:
    """Play *num_games* games with a random player on a virtual clock.

    Each game runs until the snake dies or *max_ticks* frames pass. Dead
    snakes play out the full game-over animation before the next game.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    if max_ticks < 1:
        raise ValueError("max_ticks must be at least 1.")

    cfg = config or GameConfig()
    rng = np.random.default_rng(seed)
    scores: list[int] = []
    total_frames = 0
    start = time.perf_counter()

    for _ in range(num_games):
        game_seed = int(rng.integers(2**31))
        game_cfg = dataclasses.replace(cfg, seed=game_seed, auto_restart=False)
        clock = ManualClock()
        player = RandomInput(
            turn_probability=turn_probability,
            rng=np.random.default_rng(game_seed),
        )
        engine = GameEngine(game_cfg, input_source=player, clock=clock)
        engine.start()

        while engine.phase is Phase.PLAYING and engine.state.frame < max_ticks:
            clock.advance(game_cfg.frame_interval)

        total_frames += engine.state.frame
        scores.append(engine.state.score)

        if engine.phase is Phase.GAME_OVER:
            # Play out the tail-shedding animation and reset delay.
            while engine.phase is Phase.GAME_OVER:
                clock.advance(game_cfg.game_over_shed_interval)
        else:
            engine.reset()

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        games=num_games,
        total_frames=total_frames,
        wall_time_seconds=elapsed,
        scores=scores,
    )
    logger.info(result.summary())
    return result


class _CompletionSink:
    """Forwards snapshots and resolves a future once a game has ended."""

    def __init__(
        self,
        inner: RenderSink | None,
        done: asyncio.Future,
        max_ticks: int | None = None,
    ) -> None:
        self._inner = inner
        self._done = done
        self._max_ticks = max_ticks
        self._last_score = 0
        self._seen_game_over = False

    def render(self, snapshot: Snapshot) -> None:
        if self._inner is not None:
            self._inner.render(snapshot)
        if self._done.done():
            return
        if (
            self._max_ticks is not None
            and snapshot.phase is Phase.PLAYING
            and snapshot.frame >= self._max_ticks
        ):
            self._done.set_result(snapshot)
        elif snapshot.phase is Phase.GAME_OVER:
            if not self._seen_game_over:
                self._last_score = snapshot.score
            self._seen_game_over = True
        elif snapshot.phase is Phase.READY and self._seen_game_over:
            self._done.set_result(dataclasses.replace(snapshot, score=self._last_score))


async def run_realtime(
    config: GameConfig | None = None,
    input_source: InputSource | None = None,
    render_sink: RenderSink | None = None,
    *,
    max_ticks: int | None = None,
) -> Snapshot:
    """Play one game paced by the running event loop.

    Returns the snapshot taken when the engine is back in READY after the
    game-over animation, carrying the score the game ended with. With
    *max_ticks* set, a snake still alive after that many frames ends the
    game early and the snapshot of its last frame is returned.
    """
    if max_ticks is not None and max_ticks < 1:
        raise ValueError("max_ticks must be at least 1.")
    cfg = dataclasses.replace(config or GameConfig(), auto_restart=False)
    loop = asyncio.get_running_loop()
    done: asyncio.Future[Snapshot] = loop.create_future()
    engine = GameEngine(
        cfg,
        input_source=input_source,
        render_sink=_CompletionSink(render_sink, done, max_ticks),
        clock=AsyncioClock(loop),
    )
    engine.start()
    try:
        return await done
    finally:
        engine.reset()
