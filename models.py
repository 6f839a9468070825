# /// script
# requires-python = ">=3.12"
# dependencies = ["pydantic>=2.0"]
# ///
"""Data models for player cards and game enums."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Literal, Mapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

CHART_MIN_ROLL = 1
CHART_MAX_ROLL = 20


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class ChartResult(str, Enum):
    PU = "PU"
    SO = "SO"
    GB = "GB"
    FB = "FB"
    BB = "BB"
    SINGLE = "1B"
    SINGLE_PLUS = "1B+"  # single, batter takes second if open
    DOUBLE = "2B"
    TRIPLE = "3B"
    HR = "HR"


class Hand(str, Enum):
    L = "L"
    R = "R"
    S = "S"  # switch-hitter


class PlayerType(str, Enum):
    PITCHER = "Pitcher"
    HITTER = "Hitter"


class GamePhase(str, Enum):
    PITCH = "PITCH"
    SWING = "SWING"
    RESULT = "RESULT"


class Advantage(str, Enum):
    PITCHER = "PITCHER"
    BATTER = "BATTER"


class Half(str, Enum):
    TOP = "TOP"
    BOTTOM = "BOTTOM"


# ---------------------------------------------------------------------------
# Result chart
# ---------------------------------------------------------------------------

class ChartEntry(BaseModel):
    """One band of a card's result chart, inclusive on both ends."""
    model_config = ConfigDict(frozen=True)

    range: tuple[int, int]
    result: ChartResult

    @field_validator("range")
    @classmethod
    def validate_range(cls, v: tuple[int, int]) -> tuple[int, int]:
        low, high = v
        if low > high:
            raise ValueError(f"Chart range start {low} is after its end {high}")
        return v

    def covers(self, roll: int) -> bool:
        return self.range[0] <= roll <= self.range[1]


def validate_chart(chart: Sequence[ChartEntry]) -> Sequence[ChartEntry]:
    """Check that chart ranges partition [1, 20] with no gaps or overlaps.

    Returns the chart unchanged. Raises ValueError naming the first roll
    that is uncovered or covered twice.
    """
    if not chart:
        raise ValueError("Chart must have at least one entry")
    expected = CHART_MIN_ROLL
    for entry in sorted(chart, key=lambda e: e.range[0]):
        low, high = entry.range
        if low < expected:
            raise ValueError(f"Chart ranges overlap at roll {low}")
        if low > expected:
            raise ValueError(f"Chart has no result for roll {expected}")
        expected = high + 1
    if expected != CHART_MAX_ROLL + 1:
        if expected > CHART_MAX_ROLL + 1:
            raise ValueError(f"Chart extends past roll {CHART_MAX_ROLL}")
        raise ValueError(f"Chart has no result for roll {expected}")
    return chart


# ---------------------------------------------------------------------------
# Player cards
# ---------------------------------------------------------------------------

class PlayerCard(BaseModel):
    """Base card with the attributes shared by pitchers and hitters.

    Cards come from the card service and are read-only for the game's
    lifetime; containers are tuples or read-only mappings so a card can be
    shared between games and state copies. Wire keys are camelCase
    (``playerType``, ``imageUrl``); the snake_case field names are accepted
    too.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(min_length=1)
    name: str
    year: str = ""
    team: str = ""
    player_type: PlayerType = Field(alias="playerType")
    command: int = Field(description="Control (pitcher) or on-base (hitter)")
    chart: tuple[ChartEntry, ...]
    outs: int = Field(default=0, ge=0, description="Out results on the chart")
    points: int = Field(default=0, ge=0)
    hand: Hand = Hand.R
    icons: tuple[str, ...] = ()
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("chart")
    @classmethod
    def validate_chart_partition(cls, v: tuple[ChartEntry, ...]) -> tuple[ChartEntry, ...]:
        return validate_chart(v)

    def result_for(self, roll: int) -> ChartResult | None:
        """Return the chart result for a roll, or None if no entry covers it."""
        for entry in self.chart:
            if entry.covers(roll):
                return entry.result
        return None


class PitcherCard(PlayerCard):
    player_type: Literal["Pitcher"] = Field(default="Pitcher", alias="playerType")
    ip: int = Field(ge=0, description="Innings-pitched rating")


class HitterCard(PlayerCard):
    player_type: Literal["Hitter"] = Field(default="Hitter", alias="playerType")
    speed: int = Field(ge=0)
    positions: Mapping[str, int] = Field(
        default_factory=dict, validate_default=True,
        description="Fielding position -> defensive rating",
    )

    @field_validator("positions")
    @classmethod
    def freeze_positions(cls, v: Mapping[str, int]) -> Mapping[str, int]:
        return MappingProxyType(dict(v))

    @field_serializer("positions")
    def serialize_positions(self, v: Mapping[str, int]) -> dict[str, int]:
        return dict(v)


AnyCard = Union[PitcherCard, HitterCard]


def parse_card(data: Mapping[str, Any]) -> AnyCard:
    """Build a PitcherCard or HitterCard from a raw card-service record."""
    if not isinstance(data, Mapping):
        raise ValueError(f"Card record must be an object, got {type(data).__name__}")
    raw_type = data.get("playerType", data.get("player_type"))
    if raw_type in (PlayerType.PITCHER, PlayerType.PITCHER.value):
        return PitcherCard.model_validate(data)
    if raw_type in (PlayerType.HITTER, PlayerType.HITTER.value):
        return HitterCard.model_validate(data)
    raise ValueError(f"Unknown playerType {raw_type!r} for card {data.get('id', '?')}")
