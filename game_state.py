# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Game state for one game in progress.

The at-bat engine owns a single GameState and is its only writer. Runners
on base are recorded as lineup slot handles into the batting team's lineup,
never as copies of the hitter cards.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from models import Advantage, ChartResult, GamePhase, Half, HitterCard, PitcherCard

BASE_NAMES = ("first", "second", "third")


# ---------------------------------------------------------------------------
# Teams
# ---------------------------------------------------------------------------

@dataclass
class Team:
    """One side: a name, a batting order of hitter cards and a pitcher."""
    name: str
    lineup: list[HitterCard]
    pitcher: PitcherCard

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "lineup": [p.model_dump(mode="json", by_alias=True) for p in self.lineup],
            "pitcher": self.pitcher.model_dump(mode="json", by_alias=True),
        }


@dataclass
class Score:
    home: int = 0
    away: int = 0


# ---------------------------------------------------------------------------
# Base runners
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BaseRunners:
    """Base occupancy as lineup slot handles (None = empty base)."""
    first: Optional[int] = None
    second: Optional[int] = None
    third: Optional[int] = None

    def runner_on(self, base: int) -> Optional[int]:
        """Return the handle on base 1, 2 or 3."""
        if base not in (1, 2, 3):
            raise ValueError(f"No base {base}; expected 1, 2 or 3")
        return getattr(self, BASE_NAMES[base - 1])

    def occupied(self) -> list[int]:
        """Occupied base numbers, lead runner first."""
        return [b for b in (3, 2, 1) if self.runner_on(b) is not None]

    @property
    def count(self) -> int:
        return len(self.occupied())

    @property
    def is_empty(self) -> bool:
        return self.count == 0

    @property
    def is_loaded(self) -> bool:
        return self.count == 3

    def bases_string(self) -> str:
        """Return base state string like '110' for runners on 1st and 2nd."""
        return "".join("1" if self.runner_on(b) is not None else "0" for b in (1, 2, 3))

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in BASE_NAMES}


EMPTY_BASES = BaseRunners()


# ---------------------------------------------------------------------------
# At-bat result and play-by-play
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class AtBatResult:
    """Outcome of one resolved at-bat, handed back to the caller."""
    outcome: ChartResult
    is_out: bool
    outs_recorded: int
    runs_scored: int
    bases: BaseRunners
    description: str
    scorers: tuple[int, ...] = ()

    def to_dict(self) -> dict:
        return {
            "outcome": self.outcome.value,
            "is_out": self.is_out,
            "outs_recorded": self.outs_recorded,
            "runs_scored": self.runs_scored,
            "bases": self.bases.to_dict(),
            "description": self.description,
            "scorers": list(self.scorers),
        }


@dataclass(frozen=True)
class PlayEvent:
    inning: int
    half: Half
    outs_before: int
    description: str
    event_type: str  # "at_bat", "inning_change", "game_end"
    score_home: int = 0
    score_away: int = 0
    runs_scored: int = 0
    batter_id: str = ""
    pitcher_id: str = ""

    def to_dict(self) -> dict:
        return {
            "inning": self.inning,
            "half": self.half.value,
            "outs_before": self.outs_before,
            "description": self.description,
            "event_type": self.event_type,
            "score": {"home": self.score_home, "away": self.score_away},
            "runs_scored": self.runs_scored,
            "batter_id": self.batter_id,
            "pitcher_id": self.pitcher_id,
        }


# ---------------------------------------------------------------------------
# Main game state
# ---------------------------------------------------------------------------

@dataclass
class GameState:
    """Authoritative game state."""
    home: Team
    away: Team
    game_id: Optional[str] = None
    inning: int = 1
    is_top_of_inning: bool = True  # top = away bats
    outs: int = 0
    score: Score = field(default_factory=Score)
    current_phase: GamePhase = GamePhase.PITCH
    current_batter_index: int = 0
    current_advantage: Optional[Advantage] = None
    last_pitch_roll: Optional[int] = None
    last_pitch_result: Optional[int] = None
    last_swing_roll: Optional[int] = None
    last_chart_result: Optional[ChartResult] = None
    bases: BaseRunners = EMPTY_BASES
    pitcher_batters_faced: int = 0
    is_game_over: bool = False
    winner: Optional[str] = None  # "home" or "away"
    play_log: list[PlayEvent] = field(default_factory=list)

    @property
    def half(self) -> Half:
        return Half.TOP if self.is_top_of_inning else Half.BOTTOM

    def batting_team(self) -> Team:
        return self.away if self.is_top_of_inning else self.home

    def fielding_team(self) -> Team:
        return self.home if self.is_top_of_inning else self.away

    def current_pitcher(self) -> PitcherCard:
        return self.fielding_team().pitcher

    def current_batter(self) -> HitterCard:
        lineup = self.batting_team().lineup
        return lineup[self.current_batter_index % len(lineup)]

    def runner_card(self, base: int) -> Optional[HitterCard]:
        """Resolve the handle on a base to the batting team's hitter card."""
        slot = self.bases.runner_on(base)
        if slot is None:
            return None
        return self.batting_team().lineup[slot]

    def copy(self) -> GameState:
        """Independent copy; cards are frozen and shared, containers are not."""
        return replace(
            self,
            home=Team(self.home.name, list(self.home.lineup), self.home.pitcher),
            away=Team(self.away.name, list(self.away.lineup), self.away.pitcher),
            score=Score(self.score.home, self.score.away),
            play_log=list(self.play_log),
        )

    def score_display(self) -> str:
        return f"{self.away.name} {self.score.away} - {self.home.name} {self.score.home}"

    def situation_display(self) -> str:
        half_str = "Top" if self.is_top_of_inning else "Bot"
        on_bases = []
        for base, label in ((1, "1st"), (2, "2nd"), (3, "3rd")):
            if self.bases.runner_on(base) is not None:
                on_bases.append(label)
        runners_str = "runners on " + ", ".join(on_bases) if on_bases else "bases empty"
        return f"{half_str} {self.inning}, {self.outs} out, {runners_str}, {self.score_display()}"


# ---------------------------------------------------------------------------
# Serialization support
# ---------------------------------------------------------------------------

def game_state_to_dict(game_state: GameState) -> dict:
    """Serialize game state to a JSON-ready dict for persistence or rendering."""
    batting = game_state.batting_team()

    def runner_to_dict(base: int) -> dict | None:
        slot = game_state.bases.runner_on(base)
        if slot is None:
            return None
        card = batting.lineup[slot]
        return {"slot": slot, "id": card.id, "name": card.name}

    return {
        "game_id": game_state.game_id,
        "home_team": game_state.home.to_dict(),
        "away_team": game_state.away.to_dict(),
        "inning": game_state.inning,
        "is_top_of_inning": game_state.is_top_of_inning,
        "outs": game_state.outs,
        "score": {"home": game_state.score.home, "away": game_state.score.away},
        "current_phase": game_state.current_phase.value,
        "current_batter_index": game_state.current_batter_index,
        "current_advantage": game_state.current_advantage.value if game_state.current_advantage else None,
        "last_pitch_roll": game_state.last_pitch_roll,
        "last_pitch_result": game_state.last_pitch_result,
        "last_swing_roll": game_state.last_swing_roll,
        "last_chart_result": game_state.last_chart_result.value if game_state.last_chart_result else None,
        "bases": {
            "first": runner_to_dict(1),
            "second": runner_to_dict(2),
            "third": runner_to_dict(3),
        },
        "pitcher_batters_faced": game_state.pitcher_batters_faced,
        "is_game_over": game_state.is_game_over,
        "winner": game_state.winner,
        "play_log": [e.to_dict() for e in game_state.play_log],
    }
