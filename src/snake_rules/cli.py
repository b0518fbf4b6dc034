"""Command-line tools: headless simulation, score listing, config export."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

logger = logging.getLogger(__name__)

DEFAULT_SCORES_PATH = "scores.json"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-rules",
        description="Snake rules engine: headless simulation and score tools.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play games with the built-in autopilot.",
    )
    sim_p.add_argument("--games", type=int, default=1)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=int, default=5_000)
    sim_p.add_argument("--player", type=str, default="autopilot")
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    sim_p.add_argument(
        "--difficulty", type=str, default=None,
        choices=["slow", "medium", "fast", "extreme"],
    )
    sim_p.add_argument("--scores", type=str, default=DEFAULT_SCORES_PATH)
    sim_p.add_argument(
        "--no-save", action="store_true",
        help="Keep scores in memory instead of writing the score file.",
    )
    sim_p.add_argument(
        "--realtime", action="store_true",
        help="Sleep for the level's tick interval between ticks.",
    )

    # --- scores ---
    scores_p = sub.add_parser("scores", help="List the best saved scores.")
    scores_p.add_argument("--scores", type=str, default=DEFAULT_SCORES_PATH)
    scores_p.add_argument("--limit", type=int, default=10)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Write the default game config as JSON.",
    )
    config_p.add_argument("output", help="Path for the config file.")

    return parser


def _run_simulate(args: argparse.Namespace) -> int:
    from snake_rules.config import GameConfig
    from snake_rules.driver import GameLoop, GreedyPolicy
    from snake_rules.engine import create_session
    from snake_rules.scores import JsonScoreStore, MemoryScoreStore

    try:
        config = GameConfig.load(args.config) if args.config else GameConfig()
    except (OSError, ValueError, TypeError) as exc:
        logger.error("Cannot load config %s: %s", args.config, exc)
        return 1
    if args.difficulty:
        config = replace(config, initial_difficulty=args.difficulty.upper())

    sink = MemoryScoreStore() if args.no_save else JsonScoreStore(args.scores)

    for i in range(args.games):
        seed = None if args.seed is None else args.seed + i
        engine = create_session(
            args.player, config=config, score_sink=sink, seed=seed,
        )
        loop = GameLoop(engine, GreedyPolicy(seed), realtime=args.realtime)
        result = loop.run(max_ticks=args.max_ticks)
        print(result.summary())  # noqa: T201
    return 0


def _run_scores(args: argparse.Namespace) -> int:
    from snake_rules.errors import PersistenceError
    from snake_rules.scores import JsonScoreStore

    store = JsonScoreStore(args.scores)
    try:
        best = store.top(args.limit)
    except PersistenceError as exc:
        logger.error("%s", exc)
        return 1

    if not best:
        print(f"No scores in {store.path}")  # noqa: T201
        return 0
    for rank, s in enumerate(best, start=1):
        print(f"{rank:>3}. {s.player_name:<20} {s.score:>8}  {s.timestamp}")  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    from snake_rules.config import GameConfig

    GameConfig().save(args.output)
    print(f"Wrote default config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-rules`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "scores": _run_scores,
        "config": _run_config,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
