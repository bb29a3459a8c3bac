from .catalog import ItemCatalog, ItemCatalogEntry
from .ledger import ItemGoldLedger, LedgerEntry

__all__ = ["ItemCatalog", "ItemCatalogEntry", "ItemGoldLedger", "LedgerEntry"]
