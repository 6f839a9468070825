# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0", "pytest"]
# ///
"""Tests for the baserunning rules.

Runners are lineup handles; the batter is always handle 0 and runners use
handles 1 (on first), 2 (on second) and 3 (on third) so every assertion
shows where each runner ended up.
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import pytest

from baserunning import (
    HOME,
    advance_on_fly_ball,
    advance_on_single_plus,
    advance_on_walk,
    advance_runners,
    force_out_on_ground_ball,
    is_runner_forced,
    lead_forced_base,
)
from game_state import EMPTY_BASES, BaseRunners

BATTER = 0
ON_FIRST = BaseRunners(first=1)
ON_SECOND = BaseRunners(second=2)
ON_THIRD = BaseRunners(third=3)
FIRST_AND_SECOND = BaseRunners(first=1, second=2)
FIRST_AND_THIRD = BaseRunners(first=1, third=3)
SECOND_AND_THIRD = BaseRunners(second=2, third=3)
LOADED = BaseRunners(first=1, second=2, third=3)


# ---------------------------------------------------------------------------
# Force determination
# ---------------------------------------------------------------------------

class TestIsRunnerForced:
    def test_first_always_forced(self):
        assert is_runner_forced(1, EMPTY_BASES)
        assert is_runner_forced(1, ON_FIRST)

    def test_second_forced_only_with_first_occupied(self):
        assert not is_runner_forced(2, ON_SECOND)
        assert is_runner_forced(2, FIRST_AND_SECOND)

    def test_third_forced_only_with_first_and_second(self):
        assert not is_runner_forced(3, ON_THIRD)
        assert not is_runner_forced(3, FIRST_AND_THIRD)
        assert not is_runner_forced(3, SECOND_AND_THIRD)
        assert is_runner_forced(3, LOADED)

    def test_invalid_base(self):
        with pytest.raises(ValueError):
            is_runner_forced(4, LOADED)


# ---------------------------------------------------------------------------
# Walks
# ---------------------------------------------------------------------------

class TestWalk:
    def test_bases_empty(self):
        adv = advance_on_walk(EMPTY_BASES, BATTER)
        assert adv.bases == BaseRunners(first=BATTER)
        assert adv.runs_scored == 0

    def test_runner_on_first_forced_to_second(self):
        adv = advance_on_walk(ON_FIRST, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, second=1)

    def test_runner_on_second_alone_holds(self):
        adv = advance_on_walk(ON_SECOND, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, second=2)

    def test_runner_on_third_alone_holds(self):
        adv = advance_on_walk(ON_THIRD, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, third=3)
        assert adv.runs_scored == 0

    def test_first_and_third_only_first_moves(self):
        adv = advance_on_walk(FIRST_AND_THIRD, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, second=1, third=3)
        assert adv.runs_scored == 0

    def test_first_and_second_both_move(self):
        adv = advance_on_walk(FIRST_AND_SECOND, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, second=1, third=2)

    def test_bases_loaded_forces_in_a_run(self):
        adv = advance_on_walk(LOADED, BATTER)
        assert adv.runs_scored == 1
        assert adv.scorers == (3,)
        assert adv.bases == BaseRunners(first=BATTER, second=1, third=2)
        assert adv.bases.is_loaded

    def test_input_not_modified(self):
        bases = BaseRunners(first=1, second=2)
        advance_on_walk(bases, BATTER)
        assert bases == BaseRunners(first=1, second=2)


# ---------------------------------------------------------------------------
# Ground balls
# ---------------------------------------------------------------------------

class TestGroundBall:
    def test_bases_empty_batter_out(self):
        adv = force_out_on_ground_ball(EMPTY_BASES, BATTER)
        assert adv.bases == EMPTY_BASES
        assert adv.runs_scored == 0
        assert lead_forced_base(EMPTY_BASES) == 1

    def test_bases_loaded_out_at_home(self):
        adv = force_out_on_ground_ball(LOADED, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, second=1, third=2)
        assert adv.runs_scored == 0
        assert lead_forced_base(LOADED) == HOME

    def test_first_and_second_out_at_third(self):
        adv = force_out_on_ground_ball(FIRST_AND_SECOND, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, second=1)
        assert lead_forced_base(FIRST_AND_SECOND) == 3

    def test_first_only_out_at_second(self):
        adv = force_out_on_ground_ball(ON_FIRST, BATTER)
        assert adv.bases == BaseRunners(first=BATTER)
        assert lead_forced_base(ON_FIRST) == 2

    def test_first_and_third_runner_on_third_holds(self):
        adv = force_out_on_ground_ball(FIRST_AND_THIRD, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, third=3)
        assert adv.runs_scored == 0

    def test_no_force_runners_hold(self):
        adv = force_out_on_ground_ball(SECOND_AND_THIRD, BATTER)
        assert adv.bases == SECOND_AND_THIRD
        assert adv.runs_scored == 0
        assert lead_forced_base(SECOND_AND_THIRD) == 1


# ---------------------------------------------------------------------------
# Fly balls
# ---------------------------------------------------------------------------

class TestFlyBall:
    @pytest.mark.parametrize("outs", [0, 1])
    def test_sacrifice_fly_scores_from_third(self, outs):
        adv = advance_on_fly_ball(LOADED, outs)
        assert adv.runs_scored == 1
        assert adv.scorers == (3,)
        assert adv.bases == FIRST_AND_SECOND

    def test_two_outs_no_sacrifice(self):
        adv = advance_on_fly_ball(ON_THIRD, 2)
        assert adv.runs_scored == 0
        assert adv.bases == ON_THIRD

    def test_no_runner_on_third_nothing_moves(self):
        adv = advance_on_fly_ball(FIRST_AND_SECOND, 0)
        assert adv.runs_scored == 0
        assert adv.bases == FIRST_AND_SECOND


# ---------------------------------------------------------------------------
# Hits
# ---------------------------------------------------------------------------

class TestHits:
    def test_single_moves_everyone_one_base(self):
        adv = advance_runners(FIRST_AND_SECOND, BATTER, 1)
        assert adv.bases == BaseRunners(first=BATTER, second=1, third=2)
        assert adv.runs_scored == 0

    def test_single_scores_runner_from_third(self):
        adv = advance_runners(LOADED, BATTER, 1)
        assert adv.runs_scored == 1
        assert adv.scorers == (3,)
        assert adv.bases == BaseRunners(first=BATTER, second=1, third=2)

    def test_double_scores_from_second(self):
        adv = advance_runners(FIRST_AND_SECOND, BATTER, 2)
        assert adv.runs_scored == 1
        assert adv.scorers == (2,)
        assert adv.bases == BaseRunners(second=BATTER, third=1)

    def test_triple_clears_bases(self):
        adv = advance_runners(LOADED, BATTER, 3)
        assert adv.runs_scored == 3
        assert adv.bases == BaseRunners(third=BATTER)

    def test_home_run_bases_empty(self):
        adv = advance_runners(EMPTY_BASES, BATTER, HOME)
        assert adv.runs_scored == 1
        assert adv.scorers == (BATTER,)
        assert adv.bases == EMPTY_BASES

    def test_home_run_bases_loaded(self):
        adv = advance_runners(LOADED, BATTER, HOME)
        assert adv.runs_scored == 4
        assert adv.scorers == (3, 2, 1, BATTER)
        assert adv.bases.is_empty

    @pytest.mark.parametrize("num_bases", [0, 5, -1])
    def test_invalid_hit_length(self, num_bases):
        with pytest.raises(ValueError):
            advance_runners(EMPTY_BASES, BATTER, num_bases)


class TestSinglePlus:
    def test_bases_empty_batter_to_second(self):
        adv = advance_on_single_plus(EMPTY_BASES, BATTER)
        assert adv.bases == BaseRunners(second=BATTER)

    def test_runner_on_second_moves_up_batter_takes_second(self):
        adv = advance_on_single_plus(ON_SECOND, BATTER)
        assert adv.bases == BaseRunners(second=BATTER, third=2)
        assert adv.runs_scored == 0

    def test_runner_on_first_blocks_second(self):
        adv = advance_on_single_plus(ON_FIRST, BATTER)
        assert adv.bases == BaseRunners(first=BATTER, second=1)

    def test_runs_carry_over(self):
        adv = advance_on_single_plus(ON_THIRD, BATTER)
        assert adv.runs_scored == 1
        assert adv.bases == BaseRunners(second=BATTER)
