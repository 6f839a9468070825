# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Sample cards and team loading.

Team files hold card-service records for both sides:

    {"home": {"name": ..., "pitcher": {...}, "lineup": [{...}, ...]},
     "away": {...}}

The built-in sample teams are used when no file is given.
"""

from __future__ import annotations

import copy
import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from config import GameRules
from game_state import Team
from models import HitterCard, PitcherCard, parse_card

logger = logging.getLogger(__name__)

DEFAULT_LINEUP_SIZE = GameRules().lineup_size


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class TeamLoadError(Exception):
    """Raised when team data cannot be read or does not describe valid cards."""

    def __init__(self, message: str, source: str | None = None,
                 details: list[str] | None = None):
        self.source = source
        self.details = details or []
        super().__init__(message)


# ---------------------------------------------------------------------------
# Sample cards
# ---------------------------------------------------------------------------

POWER_CHARTS: dict[str, list[dict[str, Any]]] = {
    "low": [
        {"range": [1, 4], "result": "SO"},
        {"range": [5, 10], "result": "GB"},
        {"range": [11, 14], "result": "FB"},
        {"range": [15, 16], "result": "BB"},
        {"range": [17, 19], "result": "1B"},
        {"range": [20, 20], "result": "2B"},
    ],
    "medium": [
        {"range": [1, 2], "result": "SO"},
        {"range": [3, 8], "result": "GB"},
        {"range": [9, 12], "result": "FB"},
        {"range": [13, 13], "result": "BB"},
        {"range": [14, 16], "result": "1B"},
        {"range": [17, 18], "result": "2B"},
        {"range": [19, 19], "result": "3B"},
        {"range": [20, 20], "result": "HR"},
    ],
    "high": [
        {"range": [1, 2], "result": "SO"},
        {"range": [3, 6], "result": "GB"},
        {"range": [7, 10], "result": "FB"},
        {"range": [11, 11], "result": "BB"},
        {"range": [12, 14], "result": "1B"},
        {"range": [15, 17], "result": "2B"},
        {"range": [18, 18], "result": "3B"},
        {"range": [19, 20], "result": "HR"},
    ],
}

SAMPLE_PITCHER: dict[str, Any] = {
    "id": "pitcher_1",
    "name": "Ace Pitcher",
    "year": "2021",
    "team": "Home",
    "playerType": "Pitcher",
    "command": 4,
    "outs": 16,
    "ip": 6,
    "points": 350,
    "hand": "R",
    "chart": [
        {"range": [1, 6], "result": "PU"},
        {"range": [7, 16], "result": "SO"},
        {"range": [17, 18], "result": "GB"},
        {"range": [19, 19], "result": "FB"},
        {"range": [20, 20], "result": "1B"},
    ],
}


def make_hitter(name: str, on_base: int, power: str, team: str = "Team") -> dict[str, Any]:
    """Return a raw hitter record with one of the stock power charts."""
    return {
        "id": "hitter_" + name.replace(" ", "_"),
        "name": name,
        "year": "2021",
        "team": team,
        "playerType": "Hitter",
        "command": on_base,
        "outs": 12,
        "speed": 12,
        "points": 300,
        "hand": "R",
        "positions": {"OF": 2},
        "chart": copy.deepcopy(POWER_CHARTS[power]),
    }


SAMPLE_TEAMS: dict[str, dict[str, Any]] = {
    "home": {
        "name": "Home Team",
        "pitcher": SAMPLE_PITCHER,
        "lineup": [
            make_hitter("Leadoff Hitter", 10, "low", "Home"),
            make_hitter("Contact Hitter", 9, "low", "Home"),
            make_hitter("Power Hitter", 11, "high", "Home"),
            make_hitter("Cleanup Hitter", 12, "high", "Home"),
            make_hitter("Fifth Hitter", 10, "medium", "Home"),
            make_hitter("Sixth Hitter", 9, "medium", "Home"),
            make_hitter("Seventh Hitter", 8, "low", "Home"),
            make_hitter("Eighth Hitter", 8, "low", "Home"),
            make_hitter("Ninth Hitter", 7, "low", "Home"),
        ],
    },
    "away": {
        "name": "Away Team",
        "pitcher": {**SAMPLE_PITCHER, "id": "pitcher_2", "name": "Away Ace", "team": "Away"},
        "lineup": [
            make_hitter("Away Leadoff", 10, "low", "Away"),
            make_hitter("Away Second", 9, "low", "Away"),
            make_hitter("Away Third", 11, "high", "Away"),
            make_hitter("Away Cleanup", 12, "high", "Away"),
            make_hitter("Away Fifth", 10, "medium", "Away"),
            make_hitter("Away Sixth", 9, "medium", "Away"),
            make_hitter("Away Seventh", 8, "low", "Away"),
            make_hitter("Away Eighth", 8, "low", "Away"),
            make_hitter("Away Ninth", 7, "low", "Away"),
        ],
    },
}


# ---------------------------------------------------------------------------
# Team building
# ---------------------------------------------------------------------------

def build_team(team_data: dict[str, Any], source: str | None = None,
               lineup_size: int = DEFAULT_LINEUP_SIZE) -> Team:
    """Build a Team from raw card records, checking each card's type.

    Every problem is collected before raising, so one TeamLoadError lists
    all the bad cards and a lineup of the wrong length.
    """
    if not isinstance(team_data, dict):
        raise TeamLoadError(
            f"Team entry must be a JSON object, got {type(team_data).__name__}",
            source=source,
        )
    errors: list[str] = []
    name = team_data.get("name") or team_data.get("team_name") or "Unnamed"

    pitcher = None
    try:
        pitcher = parse_card(team_data["pitcher"])
    except KeyError:
        errors.append(f"{name}: missing pitcher")
    except (ValidationError, ValueError) as exc:
        errors.append(f"{name} pitcher: {exc}")
    if pitcher is not None and not isinstance(pitcher, PitcherCard):
        errors.append(f"{name}: pitcher slot holds a {pitcher.player_type} card")

    raw_lineup = team_data.get("lineup", [])
    if not isinstance(raw_lineup, list):
        errors.append(f"{name}: lineup must be a list of cards")
        raw_lineup = []
    elif len(raw_lineup) != lineup_size:
        errors.append(f"{name}: lineup has {len(raw_lineup)} cards, expected {lineup_size}")

    lineup: list[HitterCard] = []
    for i, raw in enumerate(raw_lineup):
        try:
            card = parse_card(raw)
        except (ValidationError, ValueError) as exc:
            errors.append(f"{name} lineup[{i}]: {exc}")
            continue
        if not isinstance(card, HitterCard):
            errors.append(f"{name} lineup[{i}]: {card.name} is not a hitter")
            continue
        lineup.append(card)

    if errors:
        raise TeamLoadError(
            f"Team {name!r} has {len(errors)} problem(s)",
            source=source, details=errors,
        )
    return Team(name=name, lineup=lineup, pitcher=pitcher)


def load_teams(path: Path | str | None = None,
               lineup_size: int = DEFAULT_LINEUP_SIZE) -> dict[str, Team]:
    """Load home and away teams from a JSON file, or the built-in samples."""
    if path is None:
        data = SAMPLE_TEAMS
        source = "<sample teams>"
    else:
        source = str(path)
        try:
            with open(path) as f:
                data = json.load(f)
        except OSError as exc:
            raise TeamLoadError(f"Cannot read team file: {exc}", source=source) from exc
        except json.JSONDecodeError as exc:
            raise TeamLoadError(f"Team file is not valid JSON: {exc}", source=source) from exc

    if not isinstance(data, dict):
        raise TeamLoadError("Team file must hold a JSON object", source=source)
    missing = [side for side in ("home", "away") if side not in data]
    if missing:
        raise TeamLoadError(f"Team file is missing {', '.join(missing)}", source=source)

    teams = {side: build_team(data[side], source, lineup_size) for side in ("home", "away")}
    logger.debug("Loaded %s at %s from %s", teams["away"].name, teams["home"].name, source)
    return teams
