"""Title and description extraction from a bookmarked page"""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from linkmark.icons.constants import DESCRIPTION_MAX_LENGTH
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.models import BookmarkDetails, IconQuery, PageMetadata
from linkmark.icons.protocol import Resolver

logger = logging.getLogger(__name__)


def _normalize(text: Optional[str]) -> str:
    return " ".join((text or "").split())


def _meta_content(page: BeautifulSoup, attr: str, value: str) -> str:
    tag = page.find("meta", attrs={attr: value})
    if tag is None:
        return ""
    content = tag.get("content")
    return _normalize(str(content)) if content else ""


def scrape_title(page: BeautifulSoup) -> str:
    """Return the `<title>`, falling back to the Open Graph and Twitter titles."""
    title_element = page.find("title")
    title = _normalize(title_element.get_text()) if title_element else ""
    return (
        title
        or _meta_content(page, "property", "og:title")
        or _meta_content(page, "name", "twitter:title")
    )


def scrape_description(page: BeautifulSoup) -> str:
    """Return the meta description, falling back to the start of the first paragraph."""
    description = (
        _meta_content(page, "name", "description")
        or _meta_content(page, "property", "og:description")
        or _meta_content(page, "name", "twitter:description")
    )
    if description:
        return description

    paragraph = page.find("p")
    text = _normalize(paragraph.get_text()) if paragraph else ""
    if len(text) > DESCRIPTION_MAX_LENGTH:
        return text[:DESCRIPTION_MAX_LENGTH] + "..."
    return text


def extract_page_metadata(page: BeautifulSoup, url: str) -> PageMetadata:
    """Extract the title and description of a parsed page."""
    try:
        return PageMetadata(
            url=url, title=scrape_title(page), description=scrape_description(page)
        )
    except Exception as e:
        logger.debug(f"Exception while scraping metadata of {url}: {e}")
        return PageMetadata(url=url, title="", description="")


async def fetch_bookmark_details(
    url: str, fetcher: AsyncIconFetcher, resolver: Resolver
) -> BookmarkDetails:
    """Fetch a page once and derive both its metadata and its icon from it.

    Raises:
        - `PageFetchError` if the page can't be fetched. The icon alone could still be
          resolved, but a bookmark form has nothing to prefill then.
    """
    fetched = await fetcher.get_page(url)

    metadata = extract_page_metadata(fetched.page, fetched.url)
    icon = await resolver.resolve_icon(IconQuery(url=url, title=metadata.title), page=fetched)
    return BookmarkDetails(
        title=metadata.title,
        description=metadata.description,
        icon_url=icon.icon_url,
        icon_type=icon.icon_type,
    )
