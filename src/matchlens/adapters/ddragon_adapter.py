import asyncio
import logging
import time
from typing import Any

import aiohttp

from matchlens.config.settings import get_settings
from matchlens.core.economy.catalog import ItemCatalog
from matchlens.core.errors import CatalogUnavailableError
from matchlens.core.observability import trace_adapter
from matchlens.core.ports import ItemCatalogSourcePort

logger = logging.getLogger(__name__)


class _TTLCache:
    def __init__(self, default_ttl_s: float) -> None:
        self._store: dict[str, tuple[float, Any]] = {}
        self._ttl = float(default_ttl_s)

    def get(self, key: str) -> Any | None:
        item = self._store.get(key)
        if not item:
            return None
        exp, value = item
        if time.monotonic() >= exp:
            self._store.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._store[key] = (time.monotonic() + self._ttl, value)

    def clear(self) -> None:
        self._store.clear()


class DDragonItemCatalogAdapter(ItemCatalogSourcePort):
    """Builds an ``ItemCatalog`` from Data Dragon ``item.json`` documents.

    The most recent ``version_window`` game versions are searched, newest
    first, so items removed in the latest patch still resolve from older
    match histories. Everything fetched is cached on the instance for
    ``ttl_seconds``.
    """

    def __init__(
        self,
        base_url: str | None = None,
        locale: str | None = None,
        version_window: int | None = None,
        ttl_seconds: float | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        cfg = get_settings()
        self.base_url = (base_url or cfg.ddragon_base_url).rstrip("/")
        self.locale = locale or cfg.ddragon_locale
        self.version_window = version_window or cfg.ddragon_version_window
        self.timeout_seconds = timeout_seconds or cfg.ddragon_timeout_seconds
        ttl = cfg.item_catalog_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._cache = _TTLCache(ttl)
        self._last_versions: list[str] = []
        self._lock = asyncio.Lock()
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "DDragonItemCatalogAdapter":
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        if self.session:
            await self.session.close()
            self.session = None

    async def _get_json(self, url: str) -> Any | None:
        """GET a JSON document; None on any HTTP or network failure."""
        if not self.session:
            self.session = aiohttp.ClientSession()
        try:
            timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
            async with self.session.get(url, timeout=timeout) as response:
                if response.status == 200:
                    return await response.json()
                logger.warning(f"Failed to fetch {url}. Status: {response.status}")
                return None
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.warning(f"Network error while fetching {url}: {e}")
            return None

    async def get_versions(self) -> list[str]:
        """Most recent game versions, newest first, limited to the window."""
        cached = self._cache.get("versions")
        if cached is not None:
            return cached

        versions = await self._get_json(f"{self.base_url}/api/versions.json")
        if isinstance(versions, list) and versions:
            window = [str(v) for v in versions[: self.version_window]]
            self._cache.set("versions", window)
            self._last_versions = window
            return window

        if self._last_versions:
            logger.warning("Version list unavailable; reusing previously fetched versions")
            return self._last_versions
        raise CatalogUnavailableError("Could not fetch the Data Dragon version list")

    async def get_item_document(self, version: str) -> dict[str, Any] | None:
        cache_key = f"items_{version}_{self.locale}"
        cached = self._cache.get(cache_key)
        if cached is not None:
            return cached

        url = f"{self.base_url}/cdn/{version}/data/{self.locale}/item.json"
        document = await self._get_json(url)
        if not isinstance(document, dict) or not isinstance(document.get("data"), dict):
            logger.warning(f"Skipping version {version}: item.json unavailable or malformed")
            return None
        self._cache.set(cache_key, document)
        return document

    @trace_adapter
    async def get_catalog(self) -> ItemCatalog:
        async with self._lock:
            cached = self._cache.get("catalog")
            if cached is not None:
                return cached

            documents = []
            for version in await self.get_versions():
                document = await self.get_item_document(version)
                if document is not None:
                    documents.append(document)
            if not documents:
                raise CatalogUnavailableError("No item.json could be fetched for any version")

            catalog = ItemCatalog.from_item_documents(documents)
            logger.info(f"Item catalog built with {len(catalog)} items from {len(documents)} versions")
            self._cache.set("catalog", catalog)
            return catalog

    def clear_cache(self) -> None:
        self._cache.clear()
        self._last_versions = []
