"""Page icon scanner: rank the icons a page declares in its markup"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from linkmark.icons.constants import (
    APPLE_TOUCH_ICON_PRECOMPOSED_PRIORITY,
    APPLE_TOUCH_ICON_PRIORITY,
    HIGH_RESOLUTION_SIZES,
    ICON_PRIORITY,
    ICON_SIZE_PRIORITY,
    OG_IMAGE_PRIORITY,
    SHORTCUT_ICON_PRIORITY,
    TWITTER_IMAGE_PRIORITY,
)
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.models import IconCandidate, IconType
from linkmark.icons.utils import has_image_extension, resolve_icon_url

logger = logging.getLogger(__name__)


def _attr_text(tag: Tag, name: str) -> str:
    """Return an attribute as lowercase text, joining multi-valued attributes like `rel`."""
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, list):
        value = " ".join(value)
    return " ".join(str(value).lower().split())


def get_tag_priority(tag: Tag) -> Optional[int]:
    """Return the priority of an icon declaration, or None if the tag declares no icon."""
    if tag.name == "link":
        rel = _attr_text(tag, "rel")
        if rel == "apple-touch-icon":
            return APPLE_TOUCH_ICON_PRIORITY
        if rel == "apple-touch-icon-precomposed":
            return APPLE_TOUCH_ICON_PRECOMPOSED_PRIORITY
        if rel == "icon":
            sizes = _attr_text(tag, "sizes")
            for size, priority in ICON_SIZE_PRIORITY:
                if size in sizes:
                    return priority
            return ICON_PRIORITY
        if set(rel.split()) == {"shortcut", "icon"}:
            return SHORTCUT_ICON_PRIORITY
        return None

    if tag.name == "meta":
        if _attr_text(tag, "property") == "og:image":
            return OG_IMAGE_PRIORITY
        if _attr_text(tag, "name") == "twitter:image":
            return TWITTER_IMAGE_PRIORITY

    return None


def is_acceptable_icon(url: str, sizes: str) -> bool:
    """Keep high fidelity icons: image extensions, or a declared size of 128px or more."""
    return has_image_extension(url) or any(size in sizes for size in HIGH_RESOLUTION_SIZES)


class PageIconScanner:
    """Find the best icon declared by a page's `<link>` and `<meta>` tags."""

    def __init__(self, fetcher: AsyncIconFetcher) -> None:
        self.fetcher = fetcher

    async def scan_page_icons(self, page_url: str) -> Optional[IconCandidate]:
        """Fetch the page and return its best icon candidate, or None."""
        fetched = await self.fetcher.fetch_page(page_url)
        if fetched is None:
            return None
        return self.select_best_candidate(fetched.page, fetched.url)

    def collect_candidates(self, page: BeautifulSoup, page_url: str) -> list[IconCandidate]:
        """Return the acceptable icon candidates of a parsed page in document order."""
        candidates: list[IconCandidate] = []
        try:
            tags = page.find_all(["link", "meta"])
        except Exception as e:
            logger.warning(f"Error scanning icon tags of {page_url}: {e}")
            return candidates

        for tag in tags:
            priority = get_tag_priority(tag)
            if priority is None:
                continue

            href = tag.get("href") if tag.name == "link" else tag.get("content")
            url = resolve_icon_url(str(href) if href else None, page_url)
            if url is None:
                continue

            if not is_acceptable_icon(url, _attr_text(tag, "sizes")):
                continue

            candidates.append(IconCandidate(url=url, priority=priority, source_kind=IconType.HTML))

        return candidates

    def select_best_candidate(self, page: BeautifulSoup, page_url: str) -> Optional[IconCandidate]:
        """Return the candidate with the lowest priority number, the first one on ties."""
        candidates = self.collect_candidates(page, page_url)
        if not candidates:
            return None
        # `min` keeps the first of equal elements, which is document order here.
        return min(candidates, key=lambda candidate: candidate.priority)
