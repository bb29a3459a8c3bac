"""Match analysis: classification, per-match aggregation and cross-match averaging."""

from .aggregator import build_match_record, classify_outcome
from .averager import AggregationBucket, CrossMatchAverager
from .classifier import Attribution, EventClassifier, EventKind
from .pipeline import analyze_history, analyze_history_concurrently

__all__ = [
    "AggregationBucket",
    "Attribution",
    "CrossMatchAverager",
    "EventClassifier",
    "EventKind",
    "analyze_history",
    "analyze_history_concurrently",
    "build_match_record",
    "classify_outcome",
]
