"""
Per-match statistic records.

One ``PerspectiveStats`` is built per perspective per match. Records are
frozen and validated at construction, so consumers never re-check shape.
"""

from pydantic import Field, model_validator

from .common import BaseContract, Outcome, Perspective


def _is_non_decreasing(values: list[float]) -> bool:
    return all(a <= b for a, b in zip(values, values[1:]))


class EventSeries(BaseContract):
    """Occurrence count plus the timestamp (seconds) of every occurrence."""

    count: int = Field(0, ge=0)
    timestamps: list[float] = Field(default_factory=list)

    @model_validator(mode="after")
    def _count_matches_timestamps(self) -> "EventSeries":
        if self.count != len(self.timestamps):
            raise ValueError(
                f"count {self.count} does not match {len(self.timestamps)} timestamps"
            )
        return self


class DeathSeries(EventSeries):
    """Deaths with level, modeled respawn timer and cumulative time dead."""

    levels_at_death: list[int] = Field(default_factory=list)
    timers: list[float] = Field(default_factory=list, description="Respawn seconds per death")
    total_time_dead: list[float] = Field(
        default_factory=list, description="Running sum of respawn timers"
    )

    @model_validator(mode="after")
    def _aligned_and_cumulative(self) -> "DeathSeries":
        for name in ("levels_at_death", "timers", "total_time_dead"):
            if len(getattr(self, name)) != self.count:
                raise ValueError(f"{name} must have one entry per death")
        if not _is_non_decreasing(self.total_time_dead):
            raise ValueError("total_time_dead must be non-decreasing")
        return self


class KdaPoint(BaseContract):
    """Running KDA value at the moment of a kill, death or assist."""

    timestamp: float
    value: float = Field(..., ge=0)


class KdaHistory(BaseContract):
    total: float = Field(0.0, ge=0)
    history: list[KdaPoint] = Field(default_factory=list)


class BasicStats(BaseContract):
    kills: EventSeries = Field(default_factory=EventSeries)
    deaths: DeathSeries = Field(default_factory=DeathSeries)
    assists: EventSeries = Field(default_factory=EventSeries)
    kda: KdaHistory = Field(default_factory=KdaHistory)


class TowerKills(BaseContract):
    """Tower kills split by tier."""

    outer: EventSeries = Field(default_factory=EventSeries)
    inner: EventSeries = Field(default_factory=EventSeries)
    base: EventSeries = Field(default_factory=EventSeries)
    nexus: EventSeries = Field(default_factory=EventSeries)


class Objectives(BaseContract):
    turrets: EventSeries = Field(default_factory=EventSeries, description="All tower tiers")
    towers: TowerKills = Field(default_factory=TowerKills)
    inhibitors: EventSeries = Field(default_factory=EventSeries)
    elite_monsters: EventSeries = Field(default_factory=EventSeries)
    dragons: EventSeries = Field(default_factory=EventSeries)
    barons: EventSeries = Field(default_factory=EventSeries)
    elders: EventSeries = Field(default_factory=EventSeries)


class ItemPurchase(BaseContract):
    """One purchase with the gold it contributed after component de-duplication."""

    item_id: int
    participant_id: int = Field(..., ge=1, le=10)
    timestamp: float
    gold_attributed: float = Field(0.0, ge=0)
    cumulative_gold: float = Field(0.0, ge=0)
    lookup_failed: bool = False


class Economy(BaseContract):
    purchases: list[ItemPurchase] = Field(default_factory=list)

    @model_validator(mode="after")
    def _cumulative_gold_non_decreasing(self) -> "Economy":
        if not _is_non_decreasing([p.cumulative_gold for p in self.purchases]):
            raise ValueError("cumulative_gold must be non-decreasing")
        return self

    @property
    def total_gold(self) -> float:
        return self.purchases[-1].cumulative_gold if self.purchases else 0.0


class OutcomeInfo(BaseContract):
    result: Outcome
    surrender: bool = False


class EndGameSummary(BaseContract):
    """End-of-game totals reported by the match detail.

    For team and enemy perspectives the per-player values are averaged over
    the members; turrets and inhibitors are summed.
    """

    kills: float = Field(0.0, ge=0)
    deaths: float = Field(0.0, ge=0)
    assists: float = Field(0.0, ge=0)
    kda: float = Field(0.0, ge=0)
    level: float = Field(0.0, ge=0)
    gold_spent: float = Field(0.0, ge=0)
    time_spent_dead: float = Field(0.0, ge=0)
    turrets_killed: float = Field(0.0, ge=0)
    inhibitors_killed: float = Field(0.0, ge=0)
    game_duration: float = Field(0.0, ge=0, description="Seconds")


class PerspectiveStats(BaseContract):
    """Everything attributed to one perspective in one match."""

    perspective: Perspective
    basic_stats: BasicStats = Field(default_factory=BasicStats)
    objectives: Objectives = Field(default_factory=Objectives)
    economy: Economy = Field(default_factory=Economy)
    outcome: OutcomeInfo
    end_game: EndGameSummary | None = None


class MatchRecord(BaseContract):
    """Extracted statistics of one match. The raw payload is not retained."""

    match_id: str
    game_mode: str | None = None
    participant_id: int = Field(..., ge=1, le=10)
    player: PerspectiveStats
    team: PerspectiveStats
    enemy: PerspectiveStats

    @property
    def outcome(self) -> Outcome:
        return self.player.outcome.result

    def for_perspective(self, perspective: Perspective) -> PerspectiveStats:
        return {
            Perspective.PLAYER: self.player,
            Perspective.TEAM: self.team,
            Perspective.ENEMY: self.enemy,
        }[perspective]
