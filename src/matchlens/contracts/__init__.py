"""Contract models for data validation."""

from .aggregates import AggregatedStats, AveragedPoint, CategoryAverages, OutcomeAverages
from .common import Outcome, Perspective
from .events import EventType, TimelineEvent
from .match import MatchDetail, Participant
from .stats import (
    EndGameSummary,
    ItemPurchase,
    MatchRecord,
    PerspectiveStats,
)
from .timeline import MatchTimeline

__all__ = [
    "AggregatedStats",
    "AveragedPoint",
    "CategoryAverages",
    "OutcomeAverages",
    "Outcome",
    "Perspective",
    "EventType",
    "TimelineEvent",
    "MatchDetail",
    "Participant",
    "EndGameSummary",
    "ItemPurchase",
    "MatchRecord",
    "PerspectiveStats",
    "MatchTimeline",
]
