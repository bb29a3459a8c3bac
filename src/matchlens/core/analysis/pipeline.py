"""Match history analysis pipeline.

Pairs every match detail with its timeline by ``matchId``, builds one
``MatchRecord`` per match and keeps the most-recent-first order of the
input. Matches that cannot be analyzed are logged and skipped.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from matchlens.config.settings import get_settings
from matchlens.contracts.match import MatchDetail
from matchlens.contracts.stats import MatchRecord
from matchlens.contracts.timeline import MatchTimeline
from matchlens.core.analysis.aggregator import build_match_record
from matchlens.core.errors import MatchSkippedError
from matchlens.core.observability import trace_performance
from matchlens.core.ports import ItemCatalogPort

logger = logging.getLogger(__name__)

MatchPayload = MatchDetail | Mapping[str, Any]
TimelinePayload = MatchTimeline | Mapping[str, Any]


def payload_match_id(payload: MatchPayload | TimelinePayload | None) -> str | None:
    """``metadata.matchId`` of a raw or parsed payload, if present."""
    if isinstance(payload, MatchDetail | MatchTimeline):
        return payload.match_id
    if not isinstance(payload, Mapping):
        return None
    metadata = payload.get("metadata")
    if isinstance(metadata, Mapping):
        match_id = metadata.get("matchId")
        return str(match_id) if match_id is not None else None
    return None


def pair_timelines(
    matches: Sequence[MatchPayload], timelines: Sequence[TimelinePayload]
) -> list[tuple[MatchPayload, TimelinePayload | None]]:
    """Attach to every match the timeline sharing its ``matchId`` (or None)."""
    by_id: dict[str, TimelinePayload] = {}
    for timeline in timelines:
        match_id = payload_match_id(timeline)
        if match_id is None:
            logger.warning("Ignoring timeline without metadata.matchId")
            continue
        by_id.setdefault(match_id, timeline)

    pairs = []
    for match in matches:
        match_id = payload_match_id(match)
        pairs.append((match, by_id.get(match_id) if match_id is not None else None))
    return pairs


def _cap(matches: Sequence[MatchPayload], max_matches: int | None) -> Sequence[MatchPayload]:
    limit = max_matches if max_matches is not None else get_settings().analysis_max_matches
    if len(matches) > limit:
        logger.info(f"Analyzing the {limit} most recent of {len(matches)} matches")
    return matches[:limit]


@trace_performance
def analyze_match(
    match: MatchPayload,
    timeline: TimelinePayload | None,
    puuid: str,
    catalog: ItemCatalogPort,
) -> MatchRecord | None:
    """Build one record, or None when the match has to be skipped."""
    try:
        return build_match_record(match, timeline, puuid, catalog)
    except MatchSkippedError as e:
        logger.warning(
            f"Skipping match {e.match_id or payload_match_id(match)}: {e}",
            extra={"error_type": type(e).__name__},
        )
        return None


def analyze_history(
    matches: Sequence[MatchPayload],
    timelines: Sequence[TimelinePayload],
    puuid: str,
    catalog: ItemCatalogPort,
    *,
    max_matches: int | None = None,
) -> list[MatchRecord]:
    """Analyze a most-recent-first history sequentially."""
    pairs = pair_timelines(_cap(matches, max_matches), timelines)
    records = [analyze_match(m, t, puuid, catalog) for m, t in pairs]
    analyzed = [r for r in records if r is not None]
    logger.info(f"Analyzed {len(analyzed)} of {len(pairs)} matches")
    return analyzed


async def analyze_history_concurrently(
    matches: Sequence[MatchPayload],
    timelines: Sequence[TimelinePayload],
    puuid: str,
    catalog: ItemCatalogPort,
    *,
    max_matches: int | None = None,
    max_workers: int | None = None,
) -> list[MatchRecord]:
    """Analyze a history with per-match work on worker threads.

    At most ``max_workers`` matches are in flight at once. The result keeps
    the input order.
    """
    workers = max_workers if max_workers is not None else get_settings().analysis_max_workers
    semaphore = asyncio.Semaphore(max(1, workers))
    pairs = pair_timelines(_cap(matches, max_matches), timelines)

    async def _run(match: MatchPayload, timeline: TimelinePayload | None) -> MatchRecord | None:
        async with semaphore:
            return await asyncio.to_thread(analyze_match, match, timeline, puuid, catalog)

    records = await asyncio.gather(*(_run(m, t) for m, t in pairs))
    analyzed = [r for r in records if r is not None]
    logger.info(f"Analyzed {len(analyzed)} of {len(pairs)} matches")
    return analyzed
