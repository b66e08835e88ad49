"""Data models for icon resolution"""

from enum import StrEnum

from bs4 import BeautifulSoup
from pydantic import BaseModel, ConfigDict, field_validator

from linkmark.icons.utils import is_valid_page_url


class IconType(StrEnum):
    """Where a resolved icon came from."""

    FAVICON = "favicon"
    HTML = "html"
    LETTER = "letter"


class IconQuery(BaseModel):
    """Input of a resolution: the bookmarked URL and its title."""

    url: str
    title: str = ""

    @field_validator("url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        """Reject anything that is not an absolute http(s) URL."""
        value = value.strip()
        if not is_valid_page_url(value):
            raise ValueError("url must be an absolute http(s) URL")
        return value


class IconCandidate(BaseModel):
    """An icon reference discovered on a page, not yet selected."""

    url: str
    priority: int
    source_kind: IconType


class IconResult(BaseModel):
    """The resolved icon of a bookmark."""

    icon_url: str
    icon_type: IconType


class PageMetadata(BaseModel):
    """Title and description scraped from a bookmarked page."""

    url: str
    title: str
    description: str


class FetchedPage(BaseModel):
    """A page fetched once and shared by metadata extraction and icon scanning."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    url: str
    page: BeautifulSoup


class BookmarkDetails(BaseModel):
    """Everything needed to prefill a new bookmark, built from a single page fetch."""

    title: str
    description: str
    icon_url: str
    icon_type: IconType
