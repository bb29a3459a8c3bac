"""Gold attribution with component de-duplication."""

from types import SimpleNamespace

import pytest

from matchlens.core.economy.catalog import ItemCatalog, ItemCatalogEntry
from matchlens.core.economy.ledger import ItemGoldLedger
from matchlens.core.errors import ItemLookupError


def test_plain_item_attributes_base_gold(item_catalog: ItemCatalog, payloads: SimpleNamespace) -> None:
    ledger = ItemGoldLedger(item_catalog)
    entry = ledger.record_purchase(1, payloads.DORANS_BLADE)

    assert entry.gold == 450
    assert entry.lookup_failed is False


def test_upgrade_without_components_pays_each_component_once(
    item_catalog: ItemCatalog, payloads: SimpleNamespace
) -> None:
    ledger = ItemGoldLedger(item_catalog)
    entry = ledger.record_purchase(1, payloads.PHAGE)

    # Long Sword + Ruby Crystal, neither counted twice
    assert entry.gold == 350 + 400


def test_owned_components_are_consumed(item_catalog: ItemCatalog, payloads: SimpleNamespace) -> None:
    ledger = ItemGoldLedger(item_catalog)
    first = ledger.record_purchase(1, payloads.LONG_SWORD)
    upgrade = ledger.record_purchase(1, payloads.PHAGE)

    assert first.gold == 350
    assert upgrade.gold == 400
    assert ledger.uncommitted(1)[payloads.LONG_SWORD] == 0
    assert ledger.uncommitted(1)[payloads.PHAGE] == 1


def test_components_are_tracked_per_participant(
    item_catalog: ItemCatalog, payloads: SimpleNamespace
) -> None:
    ledger = ItemGoldLedger(item_catalog)
    ledger.record_purchase(2, payloads.LONG_SWORD)
    entry = ledger.record_purchase(1, payloads.PHAGE)

    assert entry.gold == 750
    assert ledger.uncommitted(2)[payloads.LONG_SWORD] == 1


def test_duplicate_components_consume_one_instance_each(
    item_catalog: ItemCatalog, payloads: SimpleNamespace
) -> None:
    ledger = ItemGoldLedger(item_catalog)
    ledger.record_purchase(1, payloads.LONG_SWORD)
    ledger.record_purchase(1, payloads.LONG_SWORD)
    ledger.record_purchase(1, payloads.PHAGE)

    assert ledger.uncommitted(1)[payloads.LONG_SWORD] == 1


def test_unknown_item_attributes_nothing(item_catalog: ItemCatalog) -> None:
    ledger = ItemGoldLedger(item_catalog)
    entry = ledger.record_purchase(1, 999999)

    assert entry.gold == 0
    assert entry.lookup_failed is True
    assert ledger.uncommitted(1)[999999] == 0


def test_unknown_component_contributes_zero(item_catalog: ItemCatalog, payloads: SimpleNamespace) -> None:
    ledger = ItemGoldLedger(item_catalog)
    ledger.record_purchase(1, payloads.PHAGE)
    entry = ledger.record_purchase(1, payloads.TRINITY_FORCE)

    # Phage is owned; the two other components are not in the catalog
    assert entry.gold == 0
    assert entry.lookup_failed is False


def test_catalog_lookup_raises_for_unknown_item(item_catalog: ItemCatalog) -> None:
    with pytest.raises(ItemLookupError) as exc_info:
        item_catalog.get_item_details(42)
    assert exc_info.value.item_id == 42


def test_first_document_wins() -> None:
    newest = {"data": {"1001": {"name": "Boots", "gold": {"base": 300, "total": 300}}}}
    older = {
        "data": {
            "1001": {"name": "Old Boots", "gold": {"base": 350, "total": 350}},
            "2003": {"name": "Health Potion", "gold": {"base": 50, "total": 50}},
        }
    }
    catalog = ItemCatalog.from_item_documents([newest, older])

    assert len(catalog) == 2
    assert catalog.get_item_details(1001).name == "Boots"
    assert catalog.get_item_details(1001).base_gold == 300
    assert 2003 in catalog


def test_ddragon_entry_reads_components() -> None:
    entry = ItemCatalogEntry.from_ddragon(
        3044, {"name": "Phage", "gold": {"base": 350, "total": 1100}, "from": ["1036", "1028"]}
    )
    assert entry.component_ids == [1036, 1028]
    assert entry.total_gold == 1100
