"""Initialize the icon resolver"""

import logging
from datetime import timedelta
from timeit import default_timer as timer

from linkmark.cache.redis import RedisAdapter, create_redis_client
from linkmark.configs import settings
from linkmark.icons.caching import CachingIconResolver
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.models import IconQuery
from linkmark.icons.protocol import Resolver
from linkmark.icons.resolver import IconResolver
from linkmark.utils.metrics import get_metrics_client

logger = logging.getLogger(__name__)

_resolver: Resolver | None = None
_fetcher: AsyncIconFetcher | None = None


def init_resolver() -> None:
    """Initialize the icon resolver and its HTTP session.

    This should only be called once at the startup of application.
    """
    global _resolver, _fetcher
    start = timer()

    metrics_client = get_metrics_client()
    _fetcher = AsyncIconFetcher()
    icon_resolver = IconResolver(fetcher=_fetcher, metrics_client=metrics_client)

    match settings.icons.cache:
        case "redis":
            cache = RedisAdapter(
                create_redis_client(
                    settings.redis.server,
                    max_connections=settings.redis.max_connections,
                    socket_connect_timeout=settings.redis.socket_connect_timeout_sec,
                    socket_timeout=settings.redis.socket_timeout_sec,
                )
            )
            _resolver = CachingIconResolver(
                inner=icon_resolver,
                cache=cache,
                ttl=timedelta(seconds=settings.icons.cache_ttl_sec),
                metrics_client=metrics_client,
            )
        case _:
            _resolver = icon_resolver

    logger.info(
        "Icon resolver initialization completed",
        extra={"cache": settings.icons.cache, "elapsed": timer() - start},
    )


def get_resolver() -> Resolver:
    """Return the icon resolver"""
    if _resolver is None:
        raise ValueError("Icon resolver has not been initialized.")
    return _resolver


def get_fetcher() -> AsyncIconFetcher:
    """Return the HTTP fetcher shared with the icon resolver"""
    if _fetcher is None:
        raise ValueError("Icon resolver has not been initialized.")
    return _fetcher


async def shutdown_resolver() -> None:
    """Close the icon resolver, its cache and its HTTP session."""
    global _resolver, _fetcher
    if _resolver is not None:
        await _resolver.close()
    _resolver = None
    _fetcher = None


async def resolve_icon(url: str, title: str = "") -> dict[str, str]:
    """Resolve the icon of a bookmark as `{"icon_url": ..., "icon_type": ...}`.

    Raises:
        - `pydantic.ValidationError` if `url` is not an absolute http(s) URL.
    """
    result = await get_resolver().resolve_icon(IconQuery(url=url, title=title))
    return result.model_dump(mode="json")
