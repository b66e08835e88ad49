"""Linkmark specific exceptions."""

from enum import StrEnum


class PageFetchFailure(StrEnum):
    """Why the page of a bookmark could not be fetched."""

    UNREACHABLE = "unreachable"
    TIMEOUT = "timeout"
    NOT_FOUND = "not_found"
    HTTP_ERROR = "http_error"
    UNPARSABLE = "unparsable"


class PageFetchError(Exception):
    """Raised when the page of a bookmark cannot be fetched."""

    url: str
    reason: PageFetchFailure
    status_code: int | None

    def __init__(
        self, url: str, reason: PageFetchFailure, status_code: int | None = None
    ) -> None:
        self.url = url
        self.reason = reason
        self.status_code = status_code
        status = f", status {status_code}" if status_code is not None else ""
        super().__init__(f"Failed to fetch page {url} ({reason}{status})")


class CacheAdapterError(Exception):
    """Exception raised when a cache adapter operation fails."""

    pass


class CacheEntryError(ValueError):
    """Exception raised for cache entries that can't be deserialized."""

    pass
