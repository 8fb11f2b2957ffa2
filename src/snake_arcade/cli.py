"""Command line entry point for headless snake games."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import logging
import sys
from typing import TYPE_CHECKING

from snake_arcade.errors import ConfigurationError

if TYPE_CHECKING:
    from snake_arcade.config import GameConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake arcade simulation and configuration tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play games with a random player and report scores.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    sim_p.add_argument("--games", type=int, default=10)
    sim_p.add_argument("--max-ticks", type=int, default=1_000)
    sim_p.add_argument("--grid-width", type=int, default=None)
    sim_p.add_argument("--grid-height", type=int, default=None)
    sim_p.add_argument("--frame-interval", type=float, default=None)
    sim_p.add_argument("--tolerance", type=int, default=None)
    sim_p.add_argument("--turn-probability", type=float, default=0.2)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument(
        "--realtime", action="store_true",
        help="Pace games with the asyncio clock instead of a virtual one.",
    )

    # --- config ---
    cfg_p = sub.add_parser("config", help="Print or write the default config.")
    cfg_p.add_argument(
        "--output", type=str, default=None,
        help="Write the config JSON to this path instead of stdout.",
    )

    return parser


def _load_config(args: argparse.Namespace) -> GameConfig:
    from snake_arcade.config import GameConfig

    config = GameConfig.load(args.config) if args.config else GameConfig()

    flag_map = {
        "grid_width": "grid_width",
        "grid_height": "grid_height",
        "frame_interval": "frame_interval_ms",
        "tolerance": "collision_tolerance",
    }
    overrides = {
        cfg_name: getattr(args, cli_name)
        for cli_name, cfg_name in flag_map.items()
        if getattr(args, cli_name, None) is not None
    }
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_arcade.simulate import run_realtime, simulate_games

    if args.games < 1:
        raise SystemExit("--games must be at least 1.")
    if args.max_ticks < 1:
        raise SystemExit("--max-ticks must be at least 1.")

    config = _load_config(args)
    if not args.realtime:
        result = simulate_games(
            config,
            num_games=args.games,
            max_ticks=args.max_ticks,
            turn_probability=args.turn_probability,
            seed=args.seed,
        )
        print(result.summary())  # noqa: T201
        return 0

    import numpy as np

    from snake_arcade.controls import RandomInput

    rng = np.random.default_rng(args.seed)
    for game in range(args.games):
        player = RandomInput(args.turn_probability, rng=rng)
        final = asyncio.run(
            run_realtime(config, input_source=player, max_ticks=args.max_ticks),
        )
        print(f"Game {game + 1}: score {final.score}")  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from snake_arcade.config import GameConfig

    config = GameConfig()
    if args.output:
        config.save(args.output)
    else:
        print(json.dumps(config.to_dict(), indent=2))  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except ConfigurationError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
