"""Gold-spend accounting with item component de-duplication.

When an item is bought its components are checked against the items the
participant already owns and has not yet built into something else. Owned
components are consumed and cost nothing; missing ones are paid at their
base gold. The purchased item then becomes available to later upgrades.
"""

import logging
from collections import Counter
from dataclasses import dataclass

from matchlens.core.errors import ItemLookupError
from matchlens.core.ports import ItemCatalogPort

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class LedgerEntry:
    gold: float
    lookup_failed: bool = False


class ItemGoldLedger:
    """Per-match ledger. Create a new one for every match."""

    def __init__(self, catalog: ItemCatalogPort) -> None:
        self._catalog = catalog
        self._uncommitted: dict[int, Counter[int]] = {}

    def record_purchase(self, participant_id: int, item_id: int) -> LedgerEntry:
        """Attribute gold for one purchase and update the owned-items multiset."""
        try:
            item = self._catalog.get_item_details(item_id)
        except ItemLookupError:
            logger.warning(
                f"Item {item_id} not in catalog; purchase by participant {participant_id} "
                "attributed no gold"
            )
            return LedgerEntry(gold=0.0, lookup_failed=True)

        owned = self._uncommitted.setdefault(participant_id, Counter())
        if not item.component_ids:
            gold = float(item.base_gold)
        else:
            gold = 0.0
            for component_id in item.component_ids:
                if owned[component_id] > 0:
                    owned[component_id] -= 1
                    continue
                gold += self._component_gold(component_id)

        owned[item_id] += 1
        return LedgerEntry(gold=gold)

    def uncommitted(self, participant_id: int) -> Counter[int]:
        """Copy of the items this participant can still build into upgrades."""
        return +self._uncommitted.get(participant_id, Counter())

    def _component_gold(self, component_id: int) -> float:
        try:
            return float(self._catalog.get_item_details(component_id).base_gold)
        except ItemLookupError:
            logger.warning(f"Component {component_id} not in catalog; counted as 0 gold")
            return 0.0
