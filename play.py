# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Autoplay a game from the command line.

Rolls the dice with a seeded RNG, feeds every roll to the at-bat engine and
prints the play-by-play and line score. The engine itself never rolls.

Usage:
    uv run play.py
    uv run play.py --seed 42 --verbose
    uv run play.py --teams my_teams.json --json
"""

from __future__ import annotations

import argparse
import json
import logging
import random
import sys
from typing import Callable, Optional

from pydantic import ValidationError

from config import get_log_level, load_rules
from engine import AtBatEngine
from game_state import AtBatResult, GameState
from models import Half
from sample_data import TeamLoadError, load_teams

logger = logging.getLogger(__name__)


def autoplay(engine: AtBatEngine, rng: random.Random, max_innings: int = 15,
             on_result: Optional[Callable[[AtBatResult], None]] = None) -> GameState:
    """Play at-bats with random rolls until the game ends.

    Stops after ``max_innings`` as a safety valve for long extra-inning
    games; the returned state then has ``is_game_over`` False.
    """
    sides = engine.rules.die_sides
    while not engine.is_game_over:
        if engine.get_state().inning > max_innings:
            logger.warning("Stopping after %d innings with the game still tied", max_innings)
            break
        result = engine.play_at_bat(rng.randint(1, sides), rng.randint(1, sides))
        if on_result is not None:
            on_result(result)
    return engine.get_state()


def inning_runs(game_state: GameState) -> dict[str, list[int]]:
    """Runs per inning for each side, built from the play log.

    One column per inning in which an at-bat was played; an inning the
    counter has moved to without a pitch (game over, or autoplay stopped)
    gets no column.
    """
    innings = max(
        (e.inning for e in game_state.play_log if e.event_type == "at_bat"),
        default=0,
    )
    runs = {"away": [0] * innings, "home": [0] * innings}
    for event in game_state.play_log:
        if event.event_type != "at_bat":
            continue
        side = "away" if event.half == Half.TOP else "home"
        runs[side][event.inning - 1] += event.runs_scored
    return runs


def format_line_score(game_state: GameState) -> str:
    """Return a printable line score."""
    runs = inning_runs(game_state)
    innings = len(runs["away"])
    header = f"{'Team':<20}" + "".join(f" {i:>3}" for i in range(1, innings + 1)) + "  |   R"
    lines = [header, "-" * len(header)]
    for side, team in (("away", game_state.away), ("home", game_state.home)):
        total = game_state.score.away if side == "away" else game_state.score.home
        row = f"{team.name:<20}" + "".join(f" {r:>3}" for r in runs[side])
        lines.append(row + f"  | {total:>3}")
    if game_state.winner:
        winner = game_state.home if game_state.winner == "home" else game_state.away
        lines.append(f"\nWinner: {winner.name}")
    else:
        lines.append("\nNo decision")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Autoplay a dice-driven baseball card game."
    )
    parser.add_argument(
        "--seed", type=int, default=None,
        help="Seed for the dice (random if omitted).",
    )
    parser.add_argument(
        "--teams", default=None, metavar="FILE",
        help="JSON team file (uses the sample teams if omitted).",
    )
    parser.add_argument(
        "--max-innings", type=int, default=15,
        help="Stop a tied game after this many innings, never before regulation "
             "ends (default: 15).",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Print every at-bat.",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Print the final game state as JSON instead of a line score.",
    )
    args = parser.parse_args(argv)

    try:
        log_level = get_log_level()
        rules = load_rules()
    except (ValidationError, ValueError) as exc:
        print(f"Error: invalid configuration: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        teams = load_teams(args.teams, lineup_size=rules.lineup_size)
    except TeamLoadError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        for detail in exc.details:
            print(f"  {detail}", file=sys.stderr)
        return 1

    seed = args.seed if args.seed is not None else random.randint(0, 2**31 - 1)
    rng = random.Random(seed)
    engine = AtBatEngine(teams["home"], teams["away"], game_id=f"seed_{seed}", rules=rules)
    max_innings = max(args.max_innings, rules.regulation_innings)

    if not args.json:
        print(f"Simulating game with seed {seed}...")
        print(f"{teams['away'].name} at {teams['home'].name}")
        print("=" * 72)

    def show(result: AtBatResult) -> None:
        print(f"  {result.description}")

    final = autoplay(engine, rng, max_innings=max_innings,
                     on_result=show if args.verbose and not args.json else None)

    if args.json:
        print(json.dumps(engine.snapshot(), indent=2))
    else:
        print()
        print(format_line_score(final))
    return 0


if __name__ == "__main__":
    sys.exit(main())
