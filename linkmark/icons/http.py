"""Async HTTP access for icon resolution: page fetches and icon existence checks"""

import asyncio
import logging
from typing import Optional

import httpx
from bs4 import BeautifulSoup

from linkmark.configs import settings
from linkmark.exceptions import PageFetchError, PageFetchFailure
from linkmark.icons.constants import HEAD_NOT_SUPPORTED_STATUSES, PARSER, REQUEST_HEADERS
from linkmark.icons.models import FetchedPage
from linkmark.utils.http_client import create_http_client

logger = logging.getLogger(__name__)


class AsyncIconFetcher:
    """Fetch pages and check icon URLs with a shared, bounded `httpx.AsyncClient`.

    Every call is a single attempt bounded by its own timeout. Network failures never escape
    `fetch_page` and `exists`: a failed page fetch returns None and a failed check returns
    False. `get_page` raises them as a `PageFetchError` instead.
    """

    session: httpx.AsyncClient
    page_timeout: float
    check_timeout: float
    max_page_bytes: int

    def __init__(
        self,
        session: Optional[httpx.AsyncClient] = None,
        page_timeout: Optional[float] = None,
        check_timeout: Optional[float] = None,
        max_page_bytes: Optional[int] = None,
    ) -> None:
        self.page_timeout = page_timeout or settings.icons.page_timeout_sec
        self.check_timeout = check_timeout or settings.icons.check_timeout_sec
        self.max_page_bytes = max_page_bytes or settings.icons.max_page_bytes
        self.session = session or create_http_client(
            max_connections=settings.icons.max_connections,
            connect_timeout=self.page_timeout,
            request_timeout=self.page_timeout,
            pool_timeout=self.page_timeout,
            max_redirects=settings.icons.max_redirects,
            headers=REQUEST_HEADERS,
        )

    async def get_page(self, url: str) -> FetchedPage:
        """Fetch and parse the page at `url`, reading at most `max_page_bytes` of it.

        Raises:
            - `PageFetchError` with the reason of the failure.
        """
        try:
            async with asyncio.timeout(self.page_timeout):
                async with self.session.stream(
                    "GET", url, headers=REQUEST_HEADERS, timeout=self.page_timeout
                ) as response:
                    if response.status_code == 404:
                        raise PageFetchError(url, PageFetchFailure.NOT_FOUND, 404)
                    if not response.is_success:
                        raise PageFetchError(
                            url, PageFetchFailure.HTTP_ERROR, response.status_code
                        )
                    body = await self._read_head(response)
        except (httpx.TimeoutException, TimeoutError) as e:
            raise PageFetchError(url, PageFetchFailure.TIMEOUT) from e
        except (httpx.ConnectError, httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
            raise PageFetchError(url, PageFetchFailure.UNREACHABLE) from e
        except httpx.HTTPError as e:
            raise PageFetchError(url, PageFetchFailure.HTTP_ERROR) from e

        try:
            page = BeautifulSoup(self._decode(body, response.charset_encoding), PARSER)
        except Exception as e:
            raise PageFetchError(url, PageFetchFailure.UNPARSABLE) from e
        return FetchedPage(url=str(response.url), page=page)

    async def fetch_page(self, url: str) -> Optional[FetchedPage]:
        """Fetch and parse the page at `url`. Return None if it can't be fetched."""
        try:
            return await self.get_page(url)
        except PageFetchError as e:
            logger.debug(str(e))
            return None

    async def _read_head(self, response: httpx.Response) -> bytes:
        """Read the body up to `max_page_bytes`, dropping the rest of it."""
        body = bytearray()
        async for chunk in response.aiter_bytes():
            body += chunk
            if len(body) >= self.max_page_bytes:
                logger.debug(f"Page {response.url} truncated to {self.max_page_bytes} bytes")
                break
        return bytes(body[: self.max_page_bytes])

    @staticmethod
    def _decode(body: bytes, charset: Optional[str]) -> str:
        try:
            return body.decode(charset or "utf-8", errors="replace")
        except LookupError:
            return body.decode("utf-8", errors="replace")

    async def exists(self, url: str) -> bool:
        """Check that `url` answers with a 2xx without downloading its body."""
        try:
            async with asyncio.timeout(self.check_timeout):
                response = await self.session.head(
                    url, headers=REQUEST_HEADERS, timeout=self.check_timeout
                )
                if response.status_code not in HEAD_NOT_SUPPORTED_STATUSES:
                    return response.is_success

                async with self.session.stream(
                    "GET", url, headers=REQUEST_HEADERS, timeout=self.check_timeout
                ) as streamed:
                    return streamed.is_success
        except (httpx.HTTPError, httpx.InvalidURL, TimeoutError) as e:
            logger.debug(f"Failed to check {url}: {e!r}")
            return False

    async def close(self) -> None:
        """Close HTTP session and release resources."""
        await self.session.aclose()
