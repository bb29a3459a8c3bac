"""Cross-match positional averaging.

Records arrive most recent first. The first one is passed through untouched
as ``latest_game``; the rest are bucketed by the player's outcome and, per
perspective and statistic, the i-th occurrence of every match is averaged
with the i-th occurrence of the other matches that reached it.
"""

import logging
from collections.abc import Sequence

import numpy as np

from matchlens.contracts.aggregates import (
    PAIRED_SEQUENCE_STATS,
    SCALAR_SEQUENCE_STATS,
    AggregatedStats,
    AveragedPoint,
    CategoryAverages,
    OutcomeAverages,
)
from matchlens.contracts.common import Outcome, Perspective
from matchlens.contracts.stats import EndGameSummary, MatchRecord, PerspectiveStats
from matchlens.core.errors import EmptyInputError
from matchlens.core.observability import trace_performance

logger = logging.getLogger(__name__)

_OUTCOME_FIELDS = {
    Outcome.WIN: "win",
    Outcome.LOSS: "loss",
    Outcome.SURRENDER_WIN: "surrender_win",
    Outcome.SURRENDER_LOSS: "surrender_loss",
}


def scalar_sequences(stats: PerspectiveStats) -> dict[str, list[float]]:
    basic = stats.basic_stats
    objectives = stats.objectives
    return {
        "kills": basic.kills.timestamps,
        "deaths": basic.deaths.timestamps,
        "assists": basic.assists.timestamps,
        "time_spent_dead": basic.deaths.total_time_dead,
        "turrets": objectives.turrets.timestamps,
        "outer_towers": objectives.towers.outer.timestamps,
        "inner_towers": objectives.towers.inner.timestamps,
        "base_towers": objectives.towers.base.timestamps,
        "nexus_towers": objectives.towers.nexus.timestamps,
        "inhibitors": objectives.inhibitors.timestamps,
        "elite_monsters": objectives.elite_monsters.timestamps,
        "dragons": objectives.dragons.timestamps,
        "barons": objectives.barons.timestamps,
        "elders": objectives.elders.timestamps,
    }


def paired_sequences(stats: PerspectiveStats) -> dict[str, list[tuple[float, float]]]:
    return {
        "kda": [(p.timestamp, p.value) for p in stats.basic_stats.kda.history],
        "item_gold": [(p.timestamp, p.cumulative_gold) for p in stats.economy.purchases],
    }


def _append_positional(columns: list[list], values: Sequence) -> None:
    for i, value in enumerate(values):
        if i == len(columns):
            columns.append([])
        columns[i].append(value)


class AggregationBucket:
    """Positional value collection for one perspective and outcome category.

    ``scalars[stat][i]`` holds the i-th occurrence value of every match added
    so far that had at least ``i + 1`` occurrences; ``pairs`` does the same
    for ``(timestamp, value)`` statistics.
    """

    def __init__(self) -> None:
        self.match_count = 0
        self.scalars: dict[str, list[list[float]]] = {s: [] for s in SCALAR_SEQUENCE_STATS}
        self.pairs: dict[str, list[list[tuple[float, float]]]] = {
            s: [] for s in PAIRED_SEQUENCE_STATS
        }
        self.end_games: list[EndGameSummary] = []

    @classmethod
    def of(cls, stats: PerspectiveStats) -> "AggregationBucket":
        bucket = cls()
        bucket.add(stats)
        return bucket

    def add(self, stats: PerspectiveStats) -> None:
        self.match_count += 1
        for stat, values in scalar_sequences(stats).items():
            _append_positional(self.scalars[stat], values)
        for stat, points in paired_sequences(stats).items():
            _append_positional(self.pairs[stat], points)
        if stats.end_game is not None:
            self.end_games.append(stats.end_game)

    def merge(self, other: "AggregationBucket") -> "AggregationBucket":
        """Return a new bucket holding the values of both operands."""
        merged = AggregationBucket()
        merged.match_count = self.match_count + other.match_count
        for source in (self, other):
            for stat, columns in source.scalars.items():
                _merge_columns(merged.scalars[stat], columns)
            for stat, columns in source.pairs.items():
                _merge_columns(merged.pairs[stat], columns)
            merged.end_games.extend(source.end_games)
        return merged

    def averages(self) -> CategoryAverages:
        fields: dict = {
            stat: [np.mean(column).item() for column in columns]
            for stat, columns in self.scalars.items()
        }
        for stat, columns in self.pairs.items():
            points = []
            for column in columns:
                ts, value = np.asarray(column, dtype=float).mean(axis=0)
                points.append(AveragedPoint(timestamp=ts.item(), value=value.item()))
            fields[stat] = points
        return CategoryAverages(
            match_count=self.match_count,
            end_game=average_end_games(self.end_games),
            **fields,
        )


def _merge_columns(target: list[list], columns: list[list]) -> None:
    for i, column in enumerate(columns):
        if i == len(target):
            target.append([])
        target[i].extend(column)


def average_end_games(summaries: list[EndGameSummary]) -> EndGameSummary | None:
    if not summaries:
        return None
    names = list(EndGameSummary.model_fields)
    matrix = np.array([[getattr(s, n) for n in names] for s in summaries], dtype=float)
    means = matrix.mean(axis=0)
    return EndGameSummary(**{n: means[i].item() for i, n in enumerate(names)})


def _split_latest(records: Sequence[MatchRecord]) -> tuple[MatchRecord, Sequence[MatchRecord]]:
    if not records:
        raise EmptyInputError("No match records to aggregate")
    return records[0], records[1:]


class CrossMatchAverager:
    """Folds most-recent-first match records into ``AggregatedStats``."""

    def bucket(
        self, records: Sequence[MatchRecord]
    ) -> dict[Perspective, dict[Outcome, AggregationBucket]]:
        buckets = {p: {o: AggregationBucket() for o in Outcome} for p in Perspective}
        for record in records:
            for perspective in Perspective:
                buckets[perspective][record.outcome].add(record.for_perspective(perspective))
        return buckets

    def aggregate(self, records: Sequence[MatchRecord]) -> AggregatedStats:
        """Like :meth:`average` but raises ``EmptyInputError`` on empty input."""
        latest, history = _split_latest(records)
        buckets = self.bucket(history)
        by_perspective = {
            perspective: OutcomeAverages(
                **{
                    _OUTCOME_FIELDS[outcome]: bucket.averages()
                    for outcome, bucket in buckets[perspective].items()
                }
            )
            for perspective in Perspective
        }
        logger.info(
            f"Aggregated {len(history)} matches (latest {latest.match_id} passed through)"
        )
        return AggregatedStats(
            player=by_perspective[Perspective.PLAYER],
            team=by_perspective[Perspective.TEAM],
            enemy=by_perspective[Perspective.ENEMY],
            latest_game=latest,
            matches_analyzed=len(records),
        )

    @trace_performance
    def average(self, records: Sequence[MatchRecord]) -> AggregatedStats | None:
        """Aggregate ``records``; None when there is nothing to aggregate."""
        try:
            return self.aggregate(records)
        except EmptyInputError as e:
            logger.warning(f"Nothing to average: {e}")
            return None
