"""Player statistics service.

Orchestrates one request: fetch the player's match history through the
match data port, load the item catalog, analyze every match and fold the
records into ``AggregatedStats``.
"""

from __future__ import annotations

import logging

from matchlens.config.settings import Settings, get_settings
from matchlens.contracts.aggregates import AggregatedStats
from matchlens.contracts.stats import MatchRecord
from matchlens.core.analysis.averager import CrossMatchAverager
from matchlens.core.analysis.pipeline import analyze_history_concurrently
from matchlens.core.observability import debug_wrapper
from matchlens.core.ports import ItemCatalogSourcePort, MatchDataProviderPort

logger = logging.getLogger(__name__)


class PlayerStatsService:
    """Production implementation of the player statistics flow."""

    def __init__(
        self,
        provider: MatchDataProviderPort,
        catalog_source: ItemCatalogSourcePort,
        averager: CrossMatchAverager | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.provider = provider
        self.catalog_source = catalog_source
        self.averager = averager or CrossMatchAverager()
        self.settings = settings or get_settings()

    async def analyze_matches(
        self, puuid: str, region: str, mode: str | None = None
    ) -> list[MatchRecord]:
        """Per-match records, most recent first. Skipped matches are absent."""
        matches = await self.provider.get_match_stats(puuid, region, mode)
        if not matches:
            logger.info("No matches returned for player")
            return []
        timelines = await self.provider.get_match_events(puuid, region)
        catalog = await self.catalog_source.get_catalog()
        return await analyze_history_concurrently(
            matches,
            timelines,
            puuid,
            catalog,
            max_matches=self.settings.analysis_max_matches,
            max_workers=self.settings.analysis_max_workers,
        )

    @debug_wrapper(capture_args=False, capture_result=False, add_metadata={"layer": "service"})
    async def get_player_stats(
        self, puuid: str, region: str, mode: str | None = None
    ) -> AggregatedStats | None:
        """Aggregated statistics, or None when no match could be analyzed."""
        records = await self.analyze_matches(puuid, region, mode)
        return self.averager.average(records)
