"""Path check strategy: look for icons at their conventional locations"""

import logging
from typing import Collection, Optional

from linkmark.icons.constants import CONVENTIONAL_ICON_PATHS, FALLBACK_ICON_PATHS
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.utils import join_origin

logger = logging.getLogger(__name__)


class PathChecker:
    """Check icon paths on a page's origin, one at a time, stopping at the first hit."""

    def __init__(self, fetcher: AsyncIconFetcher) -> None:
        self.fetcher = fetcher

    async def check(self, url: str) -> bool:
        """Check whether a single icon URL exists."""
        return await self.fetcher.exists(url)

    async def check_paths(
        self, page_url: str, paths: list[str], exclude: Collection[str] = ()
    ) -> Optional[str]:
        """Return the URL of the first path in `paths` that exists on the page's origin."""
        for path in paths:
            if path in exclude:
                continue
            icon_url = join_origin(page_url, path)
            if await self.check(icon_url):
                logger.debug(f"Found icon at {icon_url}")
                return icon_url
        return None

    async def check_conventional_paths(
        self, page_url: str, exclude: Collection[str] = ()
    ) -> Optional[str]:
        """Check the conventional icon paths, skipping any path listed in `exclude`."""
        return await self.check_paths(page_url, CONVENTIONAL_ICON_PATHS, exclude)

    async def check_fallback_paths(self, page_url: str) -> Optional[str]:
        """Check the lower-confidence guesses such as `/logo.png`."""
        return await self.check_paths(page_url, FALLBACK_ICON_PATHS)
