"""Static item catalog used by the gold ledger.

The catalog is a plain caller-owned object: it is built once (usually by
``DDragonItemCatalogAdapter``) and then only read during analysis, so a
single instance can be shared across worker threads.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import Field, ValidationError

from matchlens.contracts.common import BaseContract
from matchlens.core.errors import ItemLookupError
from matchlens.core.ports import ItemCatalogPort

logger = logging.getLogger(__name__)


class ItemCatalogEntry(BaseContract):
    """Pricing data for one item."""

    id: int
    name: str = ""
    base_gold: int = Field(0, ge=0, description="Gold paid on top of the components")
    total_gold: int = Field(0, ge=0)
    component_ids: list[int] = Field(default_factory=list, description="Data Dragon 'from' list")

    @classmethod
    def from_ddragon(cls, item_id: int, payload: Mapping[str, Any]) -> "ItemCatalogEntry":
        """Build an entry from one value of Data Dragon ``item.json['data']``."""
        gold = payload.get("gold") or {}
        return cls(
            id=item_id,
            name=payload.get("name", ""),
            base_gold=gold.get("base", 0),
            total_gold=gold.get("total", 0),
            component_ids=[int(c) for c in payload.get("from", [])],
        )


class ItemCatalog(ItemCatalogPort):
    """In-memory item lookup keyed by item id."""

    def __init__(self, entries: Iterable[ItemCatalogEntry] = ()) -> None:
        self._entries: dict[int, ItemCatalogEntry] = {}
        for entry in entries:
            self._entries.setdefault(entry.id, entry)

    @classmethod
    def from_item_documents(cls, documents: Iterable[Mapping[str, Any]]) -> "ItemCatalog":
        """Merge several ``item.json`` documents, newest version first.

        The first document containing an item wins. Items whose payload does
        not validate are logged and left out.
        """
        catalog = cls()
        for document in documents:
            for raw_id, payload in (document.get("data") or {}).items():
                try:
                    item_id = int(raw_id)
                except ValueError:
                    logger.debug(f"Skipping non-numeric item id {raw_id!r}")
                    continue
                if item_id in catalog._entries:
                    continue
                try:
                    catalog._entries[item_id] = ItemCatalogEntry.from_ddragon(item_id, payload)
                except (ValidationError, TypeError, ValueError) as e:
                    logger.warning(f"Skipping invalid item {item_id}: {e}")
        return catalog

    def get_item_details(self, item_id: int) -> ItemCatalogEntry:
        try:
            return self._entries[item_id]
        except KeyError:
            raise ItemLookupError(item_id) from None

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)
