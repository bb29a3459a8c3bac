from types import SimpleNamespace
from typing import Any

import pytest

from matchlens.config.settings import Settings
from matchlens.core.economy.catalog import ItemCatalog
from matchlens.core.errors import CatalogUnavailableError
from matchlens.core.ports import ItemCatalogSourcePort, MatchDataProviderPort
from matchlens.core.services.player_stats_service import PlayerStatsService


class FakeProvider(MatchDataProviderPort):
    def __init__(self, matches: list[dict[str, Any]], timelines: list[dict[str, Any]]) -> None:
        self.matches = matches
        self.timelines = timelines
        self.calls: list[tuple] = []

    async def get_match_stats(self, puuid: str, region: str, mode: str | None = None) -> list[dict[str, Any]]:
        self.calls.append(("stats", puuid, region, mode))
        return self.matches

    async def get_match_events(self, puuid: str, region: str) -> list[dict[str, Any]]:
        self.calls.append(("events", puuid, region))
        return self.timelines


class FakeCatalogSource(ItemCatalogSourcePort):
    def __init__(self, catalog: ItemCatalog | None) -> None:
        self.catalog = catalog
        self.loads = 0

    async def get_catalog(self) -> ItemCatalog:
        self.loads += 1
        if self.catalog is None:
            raise CatalogUnavailableError("offline")
        return self.catalog


def _settings(**overrides: Any) -> Settings:
    return Settings(ANALYSIS_MAX_MATCHES=overrides.get("max_matches", 100), ANALYSIS_MAX_WORKERS=2)


@pytest.mark.asyncio
async def test_get_player_stats_end_to_end(
    payloads: SimpleNamespace, item_catalog: ItemCatalog, player_puuid: str
) -> None:
    ids = ["NA1_3", "NA1_2", "NA1_1"]
    matches = [payloads.match(mid) for mid in ids]
    timelines = [
        payloads.timeline(mid, frames=[[payloads.kill(60000 * (i + 1), 1, 6)]])
        for i, mid in enumerate(ids)
    ]
    provider = FakeProvider(matches, timelines)
    service = PlayerStatsService(provider, FakeCatalogSource(item_catalog), settings=_settings())

    result = await service.get_player_stats(player_puuid, "na1", "ranked")

    assert result is not None
    assert result.latest_game.match_id == "NA1_3"
    assert result.matches_analyzed == 3
    assert result.player.win.kills == [pytest.approx(150)]
    assert provider.calls[0] == ("stats", player_puuid, "na1", "ranked")


@pytest.mark.asyncio
async def test_no_matches_returns_none(item_catalog: ItemCatalog, player_puuid: str) -> None:
    source = FakeCatalogSource(item_catalog)
    service = PlayerStatsService(FakeProvider([], []), source, settings=_settings())

    assert await service.get_player_stats(player_puuid, "na1") is None
    assert source.loads == 0


@pytest.mark.asyncio
async def test_all_matches_skipped_returns_none(
    payloads: SimpleNamespace, item_catalog: ItemCatalog
) -> None:
    provider = FakeProvider([payloads.match("NA1_1")], [payloads.timeline("NA1_1")])
    service = PlayerStatsService(provider, FakeCatalogSource(item_catalog), settings=_settings())

    assert await service.get_player_stats("unknown-puuid", "na1") is None


@pytest.mark.asyncio
async def test_max_matches_setting_is_applied(
    payloads: SimpleNamespace, item_catalog: ItemCatalog, player_puuid: str
) -> None:
    ids = [f"NA1_{i}" for i in range(5, 0, -1)]
    provider = FakeProvider([payloads.match(m) for m in ids], [payloads.timeline(m) for m in ids])
    service = PlayerStatsService(
        provider, FakeCatalogSource(item_catalog), settings=_settings(max_matches=2)
    )

    records = await service.analyze_matches(player_puuid, "na1")
    assert [r.match_id for r in records] == ["NA1_5", "NA1_4"]


@pytest.mark.asyncio
async def test_catalog_failure_propagates(payloads: SimpleNamespace, player_puuid: str) -> None:
    provider = FakeProvider([payloads.match("NA1_1")], [payloads.timeline("NA1_1")])
    service = PlayerStatsService(provider, FakeCatalogSource(None), settings=_settings())

    with pytest.raises(CatalogUnavailableError):
        await service.get_player_stats(player_puuid, "na1")
