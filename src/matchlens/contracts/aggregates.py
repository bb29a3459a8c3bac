"""
Cross-match aggregation output contracts.

Sequences are positional: index ``i`` holds the mean of the i-th occurrence
across every match in the category that reached it. Indexes beyond the list
end were reached by no match and are absent rather than zero.
"""

from pydantic import Field

from .common import BaseContract, Outcome
from .stats import EndGameSummary, MatchRecord

# Sequence statistics averaged by occurrence index (single value per occurrence)
SCALAR_SEQUENCE_STATS: tuple[str, ...] = (
    "kills",
    "deaths",
    "assists",
    "time_spent_dead",
    "turrets",
    "outer_towers",
    "inner_towers",
    "base_towers",
    "nexus_towers",
    "inhibitors",
    "elite_monsters",
    "dragons",
    "barons",
    "elders",
)

# Sequence statistics carrying (timestamp, value) pairs
PAIRED_SEQUENCE_STATS: tuple[str, ...] = ("kda", "item_gold")


class AveragedPoint(BaseContract):
    """Component-wise mean of (timestamp, value) pairs."""

    timestamp: float
    value: float


class CategoryAverages(BaseContract):
    """Positional averages for one outcome category."""

    match_count: int = Field(0, ge=0)

    kills: list[float] = Field(default_factory=list)
    deaths: list[float] = Field(default_factory=list)
    assists: list[float] = Field(default_factory=list)
    time_spent_dead: list[float] = Field(
        default_factory=list, description="Cumulative modeled seconds dead per death"
    )
    turrets: list[float] = Field(default_factory=list)
    outer_towers: list[float] = Field(default_factory=list)
    inner_towers: list[float] = Field(default_factory=list)
    base_towers: list[float] = Field(default_factory=list)
    nexus_towers: list[float] = Field(default_factory=list)
    inhibitors: list[float] = Field(default_factory=list)
    elite_monsters: list[float] = Field(default_factory=list)
    dragons: list[float] = Field(default_factory=list)
    barons: list[float] = Field(default_factory=list)
    elders: list[float] = Field(default_factory=list)

    kda: list[AveragedPoint] = Field(default_factory=list)
    item_gold: list[AveragedPoint] = Field(
        default_factory=list, description="Cumulative gold at the i-th purchase"
    )

    end_game: EndGameSummary | None = None

    def value_at(self, stat: str, index: int) -> float | AveragedPoint | None:
        """Average of the ``index``-th occurrence of ``stat``, or None if no match reached it."""
        series = getattr(self, stat)
        if 0 <= index < len(series):
            return series[index]
        return None


class OutcomeAverages(BaseContract):
    """Category averages for one perspective."""

    win: CategoryAverages = Field(default_factory=CategoryAverages)
    loss: CategoryAverages = Field(default_factory=CategoryAverages)
    surrender_win: CategoryAverages = Field(default_factory=CategoryAverages)
    surrender_loss: CategoryAverages = Field(default_factory=CategoryAverages)

    def for_outcome(self, outcome: Outcome) -> CategoryAverages:
        return {
            Outcome.WIN: self.win,
            Outcome.LOSS: self.loss,
            Outcome.SURRENDER_WIN: self.surrender_win,
            Outcome.SURRENDER_LOSS: self.surrender_loss,
        }[outcome]


class AggregatedStats(BaseContract):
    """Aggregated document returned to outer layers."""

    player: OutcomeAverages
    team: OutcomeAverages
    enemy: OutcomeAverages
    latest_game: MatchRecord = Field(..., description="Most recent match, not averaged")
    matches_analyzed: int = Field(..., ge=1, description="Records including latest_game")
