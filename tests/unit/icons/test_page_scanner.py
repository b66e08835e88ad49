# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the page_scanner.py module."""

import pytest
from bs4 import BeautifulSoup

from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.models import IconType
from linkmark.icons.page_scanner import (
    PageIconScanner,
    get_tag_priority,
    is_acceptable_icon,
)
from tests.fixtures.fake_origin import FakeOrigin

PAGE_URL = "https://example.com/page"


def first_tag(html: str):
    """Return the first `<link>` or `<meta>` tag of an HTML snippet."""
    return BeautifulSoup(html, "html.parser").find(["link", "meta"])


@pytest.fixture(name="scanner")
def fixture_scanner(fetcher: AsyncIconFetcher) -> PageIconScanner:
    """Return a page scanner backed by the fake origin."""
    return PageIconScanner(fetcher)


@pytest.mark.parametrize(
    ["html", "expected"],
    [
        ('<link rel="apple-touch-icon" href="/a.png">', 1),
        ('<link rel="Apple-Touch-Icon" href="/a.png">', 1),
        ('<link rel="apple-touch-icon-precomposed" href="/a.png">', 2),
        ('<link rel="icon" sizes="192x192" href="/a.png">', 3),
        ('<link rel="icon" sizes="180x180" href="/a.png">', 4),
        ('<link rel="icon" sizes="128x128" href="/a.png">', 5),
        ('<link rel="icon" sizes="96x96" href="/a.png">', 6),
        ('<link rel="icon" sizes="32x32" href="/a.png">', 7),
        ('<link rel="icon" href="/a.png">', 7),
        ('<link rel="shortcut icon" href="/a.png">', 8),
        ('<meta property="og:image" content="/a.png">', 9),
        ('<meta name="twitter:image" content="/a.png">', 10),
        ('<link rel="stylesheet" href="/a.css">', None),
        ('<link rel="mask-icon" href="/a.svg">', None),
        ('<meta name="description" content="hello">', None),
    ],
)
def test_get_tag_priority(html: str, expected: int | None) -> None:
    """Test the priority assigned to each kind of icon declaration."""
    assert get_tag_priority(first_tag(html)) == expected


@pytest.mark.parametrize(
    ["url", "sizes", "expected"],
    [
        ("https://example.com/icon.png", "", True),
        ("https://example.com/favicon.ico", "192x192", True),
        ("https://example.com/favicon.ico", "180x180", True),
        ("https://example.com/favicon.ico", "128x128", True),
        ("https://example.com/favicon.ico", "32x32", False),
        ("https://example.com/favicon.ico", "", False),
        ("https://example.com/icon", "96x96", False),
    ],
)
def test_is_acceptable_icon(url: str, sizes: str, expected: bool) -> None:
    """Test that only high fidelity icons are kept as candidates."""
    assert is_acceptable_icon(url, sizes) is expected


def test_select_best_candidate_prefers_apple_touch_icon(scanner: PageIconScanner) -> None:
    """Test that an apple-touch-icon beats a plain icon declared earlier."""
    page = BeautifulSoup(
        """
        <html><head>
          <link rel="icon" href="/icon.png">
          <link rel="apple-touch-icon" href="/apple.png">
        </head></html>
        """,
        "html.parser",
    )

    candidate = scanner.select_best_candidate(page, PAGE_URL)

    assert candidate is not None
    assert candidate.url == "https://example.com/apple.png"
    assert candidate.priority == 1
    assert candidate.source_kind == IconType.HTML


def test_select_best_candidate_ties_keep_document_order(scanner: PageIconScanner) -> None:
    """Test that the first declaration wins among equal priorities."""
    page = BeautifulSoup(
        """
        <link rel="icon" href="/first.png">
        <link rel="icon" href="/second.png">
        """,
        "html.parser",
    )

    candidate = scanner.select_best_candidate(page, PAGE_URL)

    assert candidate is not None
    assert candidate.url == "https://example.com/first.png"


def test_collect_candidates_filters_and_resolves(scanner: PageIconScanner) -> None:
    """Test that low fidelity, empty and non-http(s) declarations are dropped."""
    page = BeautifulSoup(
        """
        <head>
          <link rel="shortcut icon" href="/favicon.ico">
          <link rel="icon" sizes="32x32" href="/favicon-32.ico">
          <link rel="icon" href="">
          <link rel="icon" href="data:image/png;base64,AAAA">
          <link rel="icon" sizes="192x192" href="/icon-192">
          <meta property="og:image" content="https://cdn.example.net/share.jpg">
          <link rel="icon" href="/assets/icon.png">
        </head>
        """,
        "html.parser",
    )

    candidates = scanner.collect_candidates(page, PAGE_URL)

    assert [(c.url, c.priority) for c in candidates] == [
        ("https://example.com/icon-192", 3),
        ("https://cdn.example.net/share.jpg", 9),
        ("https://example.com/assets/icon.png", 7),
    ]


def test_collect_candidates_no_icons(scanner: PageIconScanner) -> None:
    """Test that a page without icon declarations yields no candidates."""
    page = BeautifulSoup("<html><body><p>Hello</p></body></html>", "html.parser")

    assert scanner.collect_candidates(page, PAGE_URL) == []
    assert scanner.select_best_candidate(page, PAGE_URL) is None


@pytest.mark.asyncio
async def test_scan_page_icons_resolves_relative_url(
    scanner: PageIconScanner, fake_origin: FakeOrigin
) -> None:
    """Test that a relative icon reference is resolved against the page URL."""
    fake_origin.add_html(PAGE_URL, '<link rel="icon" href="/assets/icon.png">')

    candidate = await scanner.scan_page_icons(PAGE_URL)

    assert candidate is not None
    assert candidate.url == "https://example.com/assets/icon.png"


@pytest.mark.asyncio
async def test_scan_page_icons_uses_final_url_after_redirect(
    scanner: PageIconScanner, fake_origin: FakeOrigin
) -> None:
    """Test that references are resolved against the page reached after redirects."""
    fake_origin.add(
        "https://example.com/old",
        301,
        headers={"Location": "https://www.example.com/new/"},
    )
    fake_origin.add_html("https://www.example.com/new/", '<link rel="icon" href="icon.png">')

    candidate = await scanner.scan_page_icons("https://example.com/old")

    assert candidate is not None
    assert candidate.url == "https://www.example.com/new/icon.png"


@pytest.mark.asyncio
async def test_scan_page_icons_page_not_found(
    scanner: PageIconScanner, fake_origin: FakeOrigin
) -> None:
    """Test that a page answering with an error status yields nothing."""
    fake_origin.add(PAGE_URL, 500, "<link rel='icon' href='/icon.png'>")

    assert await scanner.scan_page_icons(PAGE_URL) is None
