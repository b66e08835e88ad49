"""Resolver orchestrator: try every icon strategy in priority order"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

import aiodogstatsd

from linkmark.configs import settings
from linkmark.icons.constants import DEFAULT_FAVICON_PATH
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.models import FetchedPage, IconQuery, IconResult, IconType
from linkmark.icons.page_scanner import PageIconScanner
from linkmark.icons.path_checker import PathChecker
from linkmark.icons.placeholder import synthesize_placeholder
from linkmark.icons.utils import join_origin

logger = logging.getLogger(__name__)

Strategy = Callable[[str, Optional[FetchedPage]], Awaitable[Optional[IconResult]]]


class IconResolver:
    """Resolve the icon of a bookmark.

    Strategies run one after the other and the first success wins:

    1. `/favicon.ico` on the page's origin (`favicon`)
    2. icons declared in the page markup (`html`)
    3. the remaining conventional icon paths (`favicon`)
    4. optionally, lower-confidence guesses such as `/logo.png` (`favicon`)
    5. a letter icon synthesized from the title (`letter`)

    The last step cannot fail, so `resolve_icon` always returns a result.
    """

    fetcher: AsyncIconFetcher
    page_scanner: PageIconScanner
    path_checker: PathChecker
    metrics_client: aiodogstatsd.Client
    resolve_timeout: float
    fallback_paths_enabled: bool
    max_concurrent_resolutions: int

    def __init__(
        self,
        fetcher: AsyncIconFetcher,
        metrics_client: aiodogstatsd.Client,
        resolve_timeout: Optional[float] = None,
        fallback_paths_enabled: Optional[bool] = None,
        max_concurrent_resolutions: Optional[int] = None,
    ) -> None:
        self.fetcher = fetcher
        self.page_scanner = PageIconScanner(fetcher)
        self.path_checker = PathChecker(fetcher)
        self.metrics_client = metrics_client
        self.resolve_timeout = (
            settings.icons.resolve_timeout_sec if resolve_timeout is None else resolve_timeout
        )
        self.fallback_paths_enabled = (
            settings.icons.fallback_paths_enabled
            if fallback_paths_enabled is None
            else fallback_paths_enabled
        )
        self.max_concurrent_resolutions = (
            max_concurrent_resolutions or settings.icons.max_concurrent_resolutions
        )

    async def resolve_icon(
        self, query: IconQuery, page: Optional[FetchedPage] = None
    ) -> IconResult:
        """Resolve the icon of `query`. Pass `page` to reuse an already fetched page."""
        with self.metrics_client.timeit("icons.resolve.duration"):
            result: Optional[IconResult] = None
            try:
                if self.resolve_timeout > 0:
                    async with asyncio.timeout(self.resolve_timeout):
                        result = await self._discover(query.url, page)
                else:
                    result = await self._discover(query.url, page)
            except TimeoutError:
                logger.info(
                    "Icon resolution deadline exceeded",
                    extra={"url": query.url, "timeout": self.resolve_timeout},
                )
                self.metrics_client.increment("icons.resolve.timeout")

            if result is None:
                result = IconResult(
                    icon_url=synthesize_placeholder(query.title), icon_type=IconType.LETTER
                )

        self.metrics_client.increment("icons.resolve", tags={"icon_type": result.icon_type.value})
        return result

    async def resolve_many(self, queries: list[IconQuery]) -> list[IconResult]:
        """Resolve many bookmarks concurrently. Results are in the order of `queries`."""
        semaphore = asyncio.Semaphore(self.max_concurrent_resolutions)

        async def _resolve(query: IconQuery) -> IconResult:
            async with semaphore:
                return await self.resolve_icon(query)

        return list(await asyncio.gather(*(_resolve(query) for query in queries)))

    async def close(self) -> None:
        """Close the HTTP session."""
        await self.fetcher.close()

    def _strategies(self) -> list[Strategy]:
        strategies: list[Strategy] = [
            self._try_default_favicon,
            self._try_page_icons,
            self._try_conventional_paths,
        ]
        if self.fallback_paths_enabled:
            strategies.append(self._try_fallback_paths)
        return strategies

    async def _discover(self, url: str, page: Optional[FetchedPage]) -> Optional[IconResult]:
        """Run the network strategies in order and return the first hit."""
        for strategy in self._strategies():
            try:
                result = await strategy(url, page)
            except Exception as e:
                logger.error(f"Unexpected error in icon strategy {strategy.__name__}: {e}")
                continue
            if result is not None:
                return result
        return None

    async def _try_default_favicon(
        self, url: str, page: Optional[FetchedPage]
    ) -> Optional[IconResult]:
        favicon_url = join_origin(url, DEFAULT_FAVICON_PATH)
        if await self.path_checker.check(favicon_url):
            return IconResult(icon_url=favicon_url, icon_type=IconType.FAVICON)
        return None

    async def _try_page_icons(self, url: str, page: Optional[FetchedPage]) -> Optional[IconResult]:
        if page is not None:
            candidate = self.page_scanner.select_best_candidate(page.page, page.url)
        else:
            candidate = await self.page_scanner.scan_page_icons(url)
        if candidate is None:
            return None
        return IconResult(icon_url=candidate.url, icon_type=IconType.HTML)

    async def _try_conventional_paths(
        self, url: str, page: Optional[FetchedPage]
    ) -> Optional[IconResult]:
        # `/favicon.ico` was the first strategy, don't check it twice.
        icon_url = await self.path_checker.check_conventional_paths(
            url, exclude={DEFAULT_FAVICON_PATH}
        )
        if icon_url is None:
            return None
        return IconResult(icon_url=icon_url, icon_type=IconType.FAVICON)

    async def _try_fallback_paths(
        self, url: str, page: Optional[FetchedPage]
    ) -> Optional[IconResult]:
        icon_url = await self.path_checker.check_fallback_paths(url)
        if icon_url is None:
            return None
        return IconResult(icon_url=icon_url, icon_type=IconType.FAVICON)
