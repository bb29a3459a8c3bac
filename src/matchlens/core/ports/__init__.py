"""Port interfaces for hexagonal architecture.

These ports define the contracts between the analysis core and external
adapters. Match retrieval (and its rate limiting) lives entirely behind
``MatchDataProviderPort``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from matchlens.core.economy.catalog import ItemCatalogEntry

__all__ = [
    "MatchDataProviderPort",
    "ItemCatalogPort",
    "ItemCatalogSourcePort",
]


class MatchDataProviderPort(ABC):
    """Port for match history retrieval."""

    @abstractmethod
    async def get_match_stats(
        self, puuid: str, region: str, mode: str | None = None
    ) -> list[dict[str, Any]]:
        """Get match-detail payloads for a player, most recent first.

        Args:
            puuid: Player's PUUID
            region: Platform region (e.g. "na1")
            mode: Optional game mode filter

        Returns:
            Raw Match-V5 detail payloads.
        """
        pass

    @abstractmethod
    async def get_match_events(self, puuid: str, region: str) -> list[dict[str, Any]]:
        """Get timeline payloads aligned 1:1 with ``get_match_stats``."""
        pass


class ItemCatalogPort(ABC):
    """Port for static item data."""

    @abstractmethod
    def get_item_details(self, item_id: int) -> ItemCatalogEntry:
        """Get one item.

        Raises:
            ItemLookupError: If the item is unknown.
        """
        pass


class ItemCatalogSourcePort(ABC):
    """Port for loading a ready-to-use item catalog before analysis."""

    @abstractmethod
    async def get_catalog(self) -> ItemCatalogPort:
        """Return a catalog that is safe to share across worker threads.

        Raises:
            CatalogUnavailableError: If no catalog can be built.
        """
        pass
