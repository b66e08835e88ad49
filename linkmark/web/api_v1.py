"""Linkmark V1 API"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import ValidationError

from linkmark.configs import settings
from linkmark.exceptions import PageFetchError, PageFetchFailure
from linkmark.icons import get_fetcher, get_resolver
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.metadata import fetch_bookmark_details
from linkmark.icons.models import BookmarkDetails, IconQuery, IconResult
from linkmark.icons.protocol import Resolver
from linkmark.icons.utils import is_valid_page_url
from linkmark.web.models_v1 import MetadataRequest

logger = logging.getLogger(__name__)
router = APIRouter()

URL_CHARACTER_MAX = settings.web.api.v1.url_character_max
TITLE_CHARACTER_MAX = settings.web.api.v1.title_character_max

INVALID_URL_DETAIL = "url must be an absolute http(s) URL"

# Status code and detail of a metadata request whose page could not be fetched.
PAGE_FETCH_ERRORS: dict[PageFetchFailure, tuple[int, str]] = {
    PageFetchFailure.UNREACHABLE: (status.HTTP_400_BAD_REQUEST, "Unable to reach this URL"),
    PageFetchFailure.TIMEOUT: (
        status.HTTP_408_REQUEST_TIMEOUT,
        "Timed out fetching the page, please check that the URL is reachable",
    ),
    PageFetchFailure.NOT_FOUND: (status.HTTP_404_NOT_FOUND, "The page does not exist"),
}
DEFAULT_PAGE_FETCH_ERROR = (
    status.HTTP_502_BAD_GATEWAY,
    "Failed to fetch the page, please fill in the details manually",
)


@router.get(
    "/icon",
    tags=["icons"],
    summary="Resolve the icon of a bookmark",
    response_model=IconResult,
)
async def icon(
    url: Annotated[str, Query(max_length=URL_CHARACTER_MAX)],
    title: Annotated[str, Query(max_length=TITLE_CHARACTER_MAX)] = "",
    resolver: Resolver = Depends(get_resolver),
) -> IconResult:
    """Resolve the best icon of `url`, falling back to a letter icon built from `title`.

    This only fails for invalid URLs: any network failure ends in a letter icon.
    """
    try:
        query = IconQuery(url=url, title=title)
    except ValidationError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_URL_DETAIL)

    return await resolver.resolve_icon(query)


@router.post(
    "/metadata",
    tags=["icons"],
    summary="Fetch the title, description and icon of a page",
    response_model=BookmarkDetails,
)
async def metadata(
    body: MetadataRequest,
    resolver: Resolver = Depends(get_resolver),
    fetcher: AsyncIconFetcher = Depends(get_fetcher),
) -> BookmarkDetails:
    """Prefill a bookmark from its page. The page is fetched only once."""
    url = body.url.strip()
    if len(url) > URL_CHARACTER_MAX or not is_valid_page_url(url):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=INVALID_URL_DETAIL)

    try:
        return await fetch_bookmark_details(url, fetcher, resolver)
    except PageFetchError as exc:
        logger.info(f"Metadata request failed: {exc}")
        status_code, detail = PAGE_FETCH_ERRORS.get(exc.reason, DEFAULT_PAGE_FETCH_ERROR)
        raise HTTPException(status_code=status_code, detail=detail)
