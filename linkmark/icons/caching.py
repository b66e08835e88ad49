"""A caching decorator around an icon resolver"""

import hashlib
import logging
from datetime import timedelta
from typing import Optional

import aiodogstatsd
from pydantic import ValidationError

from linkmark.cache.protocol import CacheAdapter
from linkmark.exceptions import CacheAdapterError, CacheEntryError
from linkmark.icons.constants import CACHE_KEY_PREFIX
from linkmark.icons.models import FetchedPage, IconQuery, IconResult, IconType
from linkmark.icons.protocol import Resolver

logger = logging.getLogger(__name__)


def cache_key(query: IconQuery) -> str:
    """Build the cache key of a query from its URL and title."""
    digest = hashlib.sha256(f"{query.url}\n{query.title}".encode("utf-8")).hexdigest()
    return f"{CACHE_KEY_PREFIX}{digest}"


class CachingIconResolver:
    """Serve icon results from a cache, resolving and storing them on misses.

    Only `favicon` and `html` results are stored. The cache is best effort: failing reads,
    writes and corrupted entries are logged and the wrapped resolver is used as if the cache
    was empty.
    """

    inner: Resolver
    cache: CacheAdapter
    ttl: timedelta
    metrics_client: aiodogstatsd.Client

    def __init__(
        self,
        inner: Resolver,
        cache: CacheAdapter,
        ttl: timedelta,
        metrics_client: aiodogstatsd.Client,
    ) -> None:
        self.inner = inner
        self.cache = cache
        self.ttl = ttl
        self.metrics_client = metrics_client

    async def resolve_icon(
        self, query: IconQuery, page: Optional[FetchedPage] = None
    ) -> IconResult:
        """Return the cached result of `query`, or resolve and cache it."""
        key = cache_key(query)

        cached = await self._get(key)
        if cached is not None:
            self.metrics_client.increment("icons.cache.hit")
            return cached

        self.metrics_client.increment("icons.cache.miss")
        result = await self.inner.resolve_icon(query, page=page)
        # Letter icons may come from a passing outage or the deadline, never store them.
        if result.icon_type != IconType.LETTER:
            await self._store(key, result)
        return result

    async def close(self) -> None:
        """Close the wrapped resolver and the cache."""
        await self.inner.close()
        await self.cache.close()

    async def _get(self, key: str) -> Optional[IconResult]:
        try:
            value = await self.cache.get(key)
            if value is None:
                return None
            return self._deserialize(value)
        except (CacheAdapterError, CacheEntryError) as exc:
            logger.warning(f"Failed to read cached icon: {exc}")
            self.metrics_client.increment("icons.cache.error")
            return None

    async def _store(self, key: str, result: IconResult) -> None:
        try:
            await self.cache.set(key, result.model_dump_json().encode("utf-8"), ttl=self.ttl)
        except CacheAdapterError as exc:
            logger.warning(f"Failed to cache icon: {exc}")
            self.metrics_client.increment("icons.cache.error")

    @staticmethod
    def _deserialize(value: bytes) -> IconResult:
        try:
            return IconResult.model_validate_json(value)
        except ValidationError as exc:
            raise CacheEntryError(f"Invalid cached icon entry: {exc}") from exc
