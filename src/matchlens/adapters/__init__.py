from .ddragon_adapter import DDragonItemCatalogAdapter

__all__ = ["DDragonItemCatalogAdapter"]
