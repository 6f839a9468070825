# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""At-bat resolution engine.

Drives one game through the PITCH -> SWING -> RESULT phase sequence. The
caller rolls the dice and feeds each roll in; the engine compares the
pitch against the batter's on-base number, reads the governing card's
chart, moves the runners and handles inning and game transitions.

The engine performs no I/O and draws no random numbers. Every phase call
validates its input before touching state, so a rejected call leaves the
game exactly as it was and the same phase can be retried.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Union

from baserunning import (
    RunnerAdvance,
    advance_on_fly_ball,
    advance_on_single_plus,
    advance_on_walk,
    advance_runners,
    force_out_on_ground_ball,
    lead_forced_base,
)
from config import GameRules
from game_state import (
    EMPTY_BASES,
    AtBatResult,
    GameState,
    PlayEvent,
    Team,
    game_state_to_dict,
)
from models import Advantage, ChartResult, GamePhase, Half, PlayerCard

logger = logging.getLogger(__name__)

HIT_BASES = {
    ChartResult.SINGLE: 1,
    ChartResult.DOUBLE: 2,
    ChartResult.TRIPLE: 3,
    ChartResult.HR: 4,
}

OUTCOME_LABELS = {
    ChartResult.SO: "Strikeout",
    ChartResult.PU: "Pop Up",
    ChartResult.GB: "Ground Out",
    ChartResult.FB: "Fly Out",
    ChartResult.BB: "Walk",
    ChartResult.SINGLE: "Single",
    ChartResult.SINGLE_PLUS: "Single Plus",
    ChartResult.DOUBLE: "Double",
    ChartResult.TRIPLE: "Triple",
    ChartResult.HR: "Home Run!",
}

_FORCE_BASE_NAMES = {2: "second", 3: "third", 4: "home"}


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------

class GameEngineError(Exception):
    """Raised when a phase call cannot be carried out."""

    def __init__(self, message: str, phase: GamePhase | None = None):
        self.phase = phase
        super().__init__(message)


class InvalidPhaseError(GameEngineError):
    """Raised when a phase operation is called out of order or after the game ended."""


class InvalidRollError(GameEngineError, ValueError):
    """Raised when a die roll is not an integer on the die."""

    def __init__(self, message: str, roll: object, phase: GamePhase | None = None):
        self.roll = roll
        super().__init__(message, phase)


class ChartLookupError(GameEngineError):
    """Raised when no entry on a card's chart covers the roll."""

    def __init__(self, message: str, card_id: str, roll: int,
                 phase: GamePhase | None = None):
        self.card_id = card_id
        self.roll = roll
        super().__init__(message, phase)


class UnknownResultError(GameEngineError, ValueError):
    """Raised when an outcome tag is not a known chart result."""

    def __init__(self, message: str, outcome: object, phase: GamePhase | None = None):
        self.outcome = outcome
        super().__init__(message, phase)


# ---------------------------------------------------------------------------
# Rules helpers
# ---------------------------------------------------------------------------

class PitchOutcome(NamedTuple):
    pitch_result: int
    advantage: Advantage
    fatigue_penalty: int


def fatigue_penalty(ip: int, batters_faced: int, batters_per_inning: int = 3) -> int:
    """Control penalty for a pitcher worked past the IP rating.

    Nothing while the innings worked (batters faced // 3) stay within the
    rating. Past it, the penalty is every batter faced beyond ip * 3, so
    fatigue sets in all at once rather than gradually.
    """
    innings_pitched = batters_faced // batters_per_inning
    if innings_pitched <= ip:
        return 0
    return batters_faced - ip * batters_per_inning


def lookup_chart(card: PlayerCard, roll: int) -> ChartResult:
    """Return the chart result covering ``roll`` on ``card``."""
    result = card.result_for(roll)
    if result is None:
        raise ChartLookupError(
            f"No chart entry on card {card.id} ({card.name}) covers roll {roll}",
            card_id=card.id, roll=roll,
        )
    return result


def _ordinal(n: int) -> str:
    """Return ordinal string for an integer (1st, 2nd, 3rd, etc.)."""
    if 11 <= n % 100 <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class AtBatEngine:
    """Owns one GameState and advances it one phase call at a time."""

    def __init__(self, home: Team, away: Team, game_id: str | None = None,
                 rules: GameRules | None = None):
        self.rules = rules or GameRules()
        for team in (home, away):
            if len(team.lineup) != self.rules.lineup_size:
                raise ValueError(
                    f"Team {team.name!r} has {len(team.lineup)} hitters in its lineup, "
                    f"expected {self.rules.lineup_size}"
                )
        self._state = GameState(home=home, away=away, game_id=game_id)
        self._state.play_log.append(PlayEvent(
            inning=1,
            half=Half.TOP,
            outs_before=0,
            description=f"--- Top of the 1st --- ({away.name} at {home.name})",
            event_type="inning_change",
        ))

    @classmethod
    def from_state(cls, state: GameState, rules: GameRules | None = None) -> AtBatEngine:
        """Resume a game from a previously taken state copy."""
        engine = cls(state.home, state.away, state.game_id, rules)
        engine._state = state.copy()
        return engine

    # -------------------------------------------------------------------
    # State access
    # -------------------------------------------------------------------

    def get_state(self) -> GameState:
        """Return an independent copy of the current game state."""
        return self._state.copy()

    def snapshot(self) -> dict:
        """Return the current game state as a JSON-ready dict."""
        return game_state_to_dict(self._state)

    @property
    def phase(self) -> GamePhase:
        return self._state.current_phase

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    # -------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------

    def _require_phase(self, expected: GamePhase, operation: str) -> None:
        state = self._state
        if state.is_game_over:
            logger.warning("%s rejected: game is over", operation)
            raise InvalidPhaseError(f"Cannot {operation}: the game is over", state.current_phase)
        if state.current_phase != expected:
            logger.warning("%s rejected in phase %s", operation, state.current_phase.value)
            raise InvalidPhaseError(
                f"Cannot {operation} during the {state.current_phase.value} phase; "
                f"expected {expected.value}",
                state.current_phase,
            )

    def _validate_roll(self, roll: object) -> int:
        sides = self.rules.die_sides
        if isinstance(roll, bool) or not isinstance(roll, int) or not 1 <= roll <= sides:
            logger.warning("Rejected roll %r (die is 1-%d)", roll, sides)
            raise InvalidRollError(
                f"Roll must be an integer from 1 to {sides}, got {roll!r}",
                roll=roll, phase=self._state.current_phase,
            )
        return roll

    def _coerce_outcome(self, outcome: Union[ChartResult, str, None]) -> ChartResult:
        if outcome is None:
            outcome = self._state.last_chart_result
        try:
            return ChartResult(outcome)
        except ValueError:
            logger.warning("Rejected unknown chart result %r", outcome)
            raise UnknownResultError(
                f"Unknown chart result {outcome!r}", outcome=outcome,
                phase=self._state.current_phase,
            ) from None

    # -------------------------------------------------------------------
    # Phase operations
    # -------------------------------------------------------------------

    def execute_pitch_phase(self, roll: int) -> PitchOutcome:
        """Roll the pitch: roll + fatigued control against the batter's on-base.

        The pitcher gets the advantage only by beating the on-base number;
        a tie goes to the batter.
        """
        self._require_phase(GamePhase.PITCH, "execute the pitch phase")
        roll = self._validate_roll(roll)

        state = self._state
        pitcher = state.current_pitcher()
        batter = state.current_batter()

        penalty = fatigue_penalty(
            pitcher.ip, state.pitcher_batters_faced, self.rules.batters_per_inning_pitched
        )
        pitch_result = roll + pitcher.command - penalty
        advantage = Advantage.PITCHER if pitch_result > batter.command else Advantage.BATTER

        state.last_pitch_roll = roll
        state.last_pitch_result = pitch_result
        state.current_advantage = advantage
        state.current_phase = GamePhase.SWING

        logger.debug(
            "Pitch: %s rolls %d (control %d, fatigue -%d) = %d vs %s on-base %d -> %s",
            pitcher.name, roll, pitcher.command, penalty, pitch_result,
            batter.name, batter.command, advantage.value,
        )
        return PitchOutcome(pitch_result, advantage, penalty)

    def execute_swing_phase(self, roll: int) -> ChartResult:
        """Roll the swing on the chart of whichever side holds the advantage."""
        self._require_phase(GamePhase.SWING, "execute the swing phase")
        state = self._state
        if state.current_advantage is None:
            logger.warning("Swing rejected: no advantage determined")
            raise InvalidPhaseError("No advantage determined; roll the pitch first",
                                    state.current_phase)
        roll = self._validate_roll(roll)

        if state.current_advantage == Advantage.PITCHER:
            chart_owner: PlayerCard = state.current_pitcher()
        else:
            chart_owner = state.current_batter()
        chart_result = lookup_chart(chart_owner, roll)

        state.last_swing_roll = roll
        state.last_chart_result = chart_result
        state.current_phase = GamePhase.RESULT

        logger.debug("Swing: %d on %s's chart -> %s", roll, chart_owner.name, chart_result.value)
        return chart_result

    def resolve_result(self, outcome: Union[ChartResult, str, None] = None) -> AtBatResult:
        """Apply a chart result to the game and return what happened.

        With no argument, the result of the last swing is used.
        """
        self._require_phase(GamePhase.RESULT, "resolve a result")
        result = self._play_outcome(self._coerce_outcome(outcome))
        self._apply_result(result)
        return result

    def play_at_bat(self, pitch_roll: int, swing_roll: int) -> AtBatResult:
        """Run a full at-bat from the pitch phase through the result."""
        self._require_phase(GamePhase.PITCH, "play an at-bat")
        self._validate_roll(pitch_roll)
        self._validate_roll(swing_roll)
        self.execute_pitch_phase(pitch_roll)
        self.execute_swing_phase(swing_roll)
        return self.resolve_result()

    # -------------------------------------------------------------------
    # Outcome resolution
    # -------------------------------------------------------------------

    def _play_outcome(self, outcome: ChartResult) -> AtBatResult:
        state = self._state
        bases = state.bases
        batter_slot = state.current_batter_index
        batter = state.current_batter()
        label = OUTCOME_LABELS[outcome]
        outs_recorded = 0

        if outcome in (ChartResult.SO, ChartResult.PU):
            advance = RunnerAdvance(bases)
            outs_recorded = 1
        elif outcome == ChartResult.GB:
            force_base = lead_forced_base(bases)
            if force_base > 1:
                runner = state.runner_card(force_base - 1)
                label = f"Fielder's Choice, {runner.name} out at {_FORCE_BASE_NAMES[force_base]}"
            advance = force_out_on_ground_ball(bases, batter_slot)
            outs_recorded = 1
        elif outcome == ChartResult.FB:
            advance = advance_on_fly_ball(bases, state.outs)
            if advance.runs_scored:
                label = "Sacrifice Fly"
            outs_recorded = 1
        elif outcome == ChartResult.BB:
            advance = advance_on_walk(bases, batter_slot)
        elif outcome == ChartResult.SINGLE_PLUS:
            advance = advance_on_single_plus(bases, batter_slot)
        elif outcome in HIT_BASES:
            advance = advance_runners(bases, batter_slot, HIT_BASES[outcome])
        else:
            raise UnknownResultError(f"No rule for chart result {outcome!r}", outcome,
                                     state.current_phase)

        lineup = state.batting_team().lineup
        description = f"{batter.name}: {label}"
        scored = [lineup[slot].name for slot in advance.scorers if slot != batter_slot]
        if scored:
            description += ". " + ", ".join(f"{name} scores" for name in scored)

        return AtBatResult(
            outcome=outcome,
            is_out=outs_recorded > 0,
            outs_recorded=outs_recorded,
            runs_scored=advance.runs_scored,
            bases=advance.bases,
            description=description,
            scorers=advance.scorers,
        )

    def _apply_result(self, result: AtBatResult) -> None:
        """Commit a resolved at-bat to the game state."""
        state = self._state
        batter = state.current_batter()
        pitcher = state.current_pitcher()
        outs_before = state.outs

        state.bases = result.bases
        if state.is_top_of_inning:
            state.score.away += result.runs_scored
        else:
            state.score.home += result.runs_scored
        state.outs += result.outs_recorded
        state.pitcher_batters_faced += 1
        state.current_advantage = None

        description = result.description
        if result.runs_scored > 0:
            description += f" [{state.score_display()}]"
        state.play_log.append(PlayEvent(
            inning=state.inning,
            half=state.half,
            outs_before=outs_before,
            description=description,
            event_type="at_bat",
            score_home=state.score.home,
            score_away=state.score.away,
            runs_scored=result.runs_scored,
            batter_id=batter.id,
            pitcher_id=pitcher.id,
        ))
        logger.debug("Result: %s", description)

        if state.outs >= self.rules.outs_per_inning:
            self._end_half_inning()
        else:
            state.current_batter_index = (state.current_batter_index + 1) % self.rules.lineup_size
            state.current_phase = GamePhase.PITCH

    def _end_half_inning(self) -> None:
        """Handle the transition between half-innings."""
        state = self._state
        state.outs = 0
        state.bases = EMPTY_BASES
        state.current_batter_index = 0
        state.pitcher_batters_faced = 0
        state.current_phase = GamePhase.PITCH

        if state.is_top_of_inning:
            state.is_top_of_inning = False
        else:
            state.is_top_of_inning = True
            state.inning += 1
            if (state.inning > self.rules.regulation_innings
                    and state.score.home != state.score.away):
                self._finish_game()
                return

        heading = f"--- {'Top' if state.is_top_of_inning else 'Bottom'} of the {_ordinal(state.inning)} ---"
        state.play_log.append(PlayEvent(
            inning=state.inning,
            half=state.half,
            outs_before=0,
            description=heading,
            event_type="inning_change",
            score_home=state.score.home,
            score_away=state.score.away,
        ))
        logger.info("%s %s", heading, state.score_display())

    def _finish_game(self) -> None:
        state = self._state
        state.is_game_over = True
        home_wins = state.score.home > state.score.away
        state.winner = "home" if home_wins else "away"
        winner = state.home if home_wins else state.away
        description = (
            f"Game over! {winner.name} wins "
            f"{max(state.score.home, state.score.away)}-{min(state.score.home, state.score.away)}!"
        )
        state.play_log.append(PlayEvent(
            inning=state.inning,
            half=state.half,
            outs_before=0,
            description=description,
            event_type="game_end",
            score_home=state.score.home,
            score_away=state.score.away,
        ))
        logger.info("%s", description)
