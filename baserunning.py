# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Baserunning rules.

Pure functions over a BaseRunners snapshot. Each returns a new snapshot,
the number of runs that scored and the lineup handles of the runners who
crossed the plate. Nothing here reads or writes game state.

Runners and the batter are lineup slot handles (see game_state.BaseRunners).
"""

from __future__ import annotations

from dataclasses import dataclass

from game_state import BaseRunners

HOME = 4


@dataclass(frozen=True)
class RunnerAdvance:
    bases: BaseRunners
    runs_scored: int = 0
    scorers: tuple[int, ...] = ()


def _place(runners: dict[int, int]) -> BaseRunners:
    return BaseRunners(
        first=runners.get(1),
        second=runners.get(2),
        third=runners.get(3),
    )


# ---------------------------------------------------------------------------
# Force plays
# ---------------------------------------------------------------------------

def is_runner_forced(base: int, bases: BaseRunners) -> bool:
    """Return True if a runner on ``base`` must advance when the batter reaches.

    A runner is forced when every base behind the runner is occupied.
    """
    if base == 1:
        return True
    if base == 2:
        return bases.first is not None
    if base == 3:
        return bases.first is not None and bases.second is not None
    raise ValueError(f"No base {base}; expected 1, 2 or 3")


def advance_on_walk(bases: BaseRunners, batter: int) -> RunnerAdvance:
    """Walk: batter to first, only forced runners move up one base."""
    runners: dict[int, int] = {}
    scorers: list[int] = []

    # Lead runner first so a trailing runner never lands on an occupied base
    if bases.third is not None:
        if is_runner_forced(3, bases):
            scorers.append(bases.third)
        else:
            runners[3] = bases.third
    if bases.second is not None:
        if is_runner_forced(2, bases):
            runners[3] = bases.second
        else:
            runners[2] = bases.second
    if bases.first is not None:
        runners[2] = bases.first
    runners[1] = batter

    return RunnerAdvance(_place(runners), len(scorers), tuple(scorers))


def force_out_on_ground_ball(bases: BaseRunners, batter: int) -> RunnerAdvance:
    """Ground ball: take the force at the furthest base that has one.

    Exactly one out is made. No run scores on the play.
    """
    if bases.is_loaded:
        # Out at home; everyone behind moves up
        return RunnerAdvance(BaseRunners(first=batter, second=bases.first, third=bases.second))

    if bases.first is not None and bases.second is not None:
        # Out at third; runner on third (if any) was not forced and holds
        return RunnerAdvance(BaseRunners(first=batter, second=bases.first, third=bases.third))

    if bases.first is not None:
        # Out at second
        return RunnerAdvance(BaseRunners(first=batter, second=bases.second, third=bases.third))

    # No force: batter is out at first, runners hold
    return RunnerAdvance(BaseRunners(first=None, second=bases.second, third=bases.third))


def lead_forced_base(bases: BaseRunners) -> int:
    """Return the base where a ground-ball force out is made (1 = batter at first)."""
    if bases.is_loaded:
        return HOME
    if bases.first is not None and bases.second is not None:
        return 3
    if bases.first is not None:
        return 2
    return 1


# ---------------------------------------------------------------------------
# Fly balls
# ---------------------------------------------------------------------------

def advance_on_fly_ball(bases: BaseRunners, outs: int) -> RunnerAdvance:
    """Fly out: runner on third tags and scores with fewer than two outs.

    ``outs`` is the count before this play's out is recorded.
    """
    if bases.third is not None and outs < 2:
        return RunnerAdvance(
            BaseRunners(first=bases.first, second=bases.second, third=None),
            runs_scored=1,
            scorers=(bases.third,),
        )
    return RunnerAdvance(bases)


# ---------------------------------------------------------------------------
# Hits
# ---------------------------------------------------------------------------

def advance_runners(bases: BaseRunners, batter: int, num_bases: int) -> RunnerAdvance:
    """Every runner moves ``num_bases``; the batter lands on that base.

    ``num_bases`` is 1, 2 or 3 for a single, double or triple and 4 for a
    home run, which clears the bases.
    """
    if num_bases not in (1, 2, 3, 4):
        raise ValueError(f"A hit advances 1-4 bases, got {num_bases}")

    runners: dict[int, int] = {}
    scorers: list[int] = []
    for base in bases.occupied():
        runner = bases.runner_on(base)
        target = base + num_bases
        if target >= HOME:
            scorers.append(runner)
        else:
            runners[target] = runner

    if num_bases == HOME:
        scorers.append(batter)
    else:
        runners[num_bases] = batter

    return RunnerAdvance(_place(runners), len(scorers), tuple(scorers))


def advance_on_single_plus(bases: BaseRunners, batter: int) -> RunnerAdvance:
    """Single plus: a single, then the batter takes second if it is open."""
    single = advance_runners(bases, batter, 1)
    if single.bases.second is not None:
        return single
    return RunnerAdvance(
        BaseRunners(first=None, second=batter, third=single.bases.third),
        single.runs_scored,
        single.scorers,
    )
