# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Integration tests for the icon and metadata endpoints of the v1 API."""

import base64

import httpx

import pytest
from starlette.testclient import TestClient

from linkmark.icons.placeholder import synthesize_placeholder
from tests.fixtures.fake_origin import FakeOrigin


def test_icon_favicon(client: TestClient, fake_origin: FakeOrigin) -> None:
    """Test that a site with a /favicon.ico resolves to it."""
    fake_origin.add("https://example.com/favicon.ico")

    response = client.get("/api/v1/icon", params={"url": "https://example.com"})

    assert response.status_code == 200
    assert response.json() == {
        "icon_url": "https://example.com/favicon.ico",
        "icon_type": "favicon",
    }


def test_icon_html(client: TestClient, fake_origin: FakeOrigin) -> None:
    """Test that the best icon declared by the page is returned."""
    fake_origin.add_html(
        "https://example.com/page",
        '<link rel="icon" href="/icon.png"><link rel="apple-touch-icon" href="/apple.png">',
    )

    response = client.get("/api/v1/icon", params={"url": "https://example.com/page"})

    assert response.status_code == 200
    assert response.json() == {
        "icon_url": "https://example.com/apple.png",
        "icon_type": "html",
    }


def test_icon_letter(client: TestClient) -> None:
    """Test that a site without icons gets the letter icon of its title."""
    response = client.get(
        "/api/v1/icon", params={"url": "https://noicon.test", "title": "无图标站点"}
    )

    assert response.status_code == 200
    result = response.json()
    assert result["icon_type"] == "letter"
    assert result["icon_url"] == synthesize_placeholder("无图标站点")
    svg = base64.b64decode(result["icon_url"].removeprefix("data:image/svg+xml;base64,"))
    assert ">无</text>" in svg.decode("utf-8")


@pytest.mark.parametrize(
    "params",
    [
        {"url": "example.com"},
        {"url": "ftp://example.com"},
        {"url": ""},
        {},
        {"url": "https://example.com/" + "a" * 2048},
    ],
    ids=["no-scheme", "ftp", "empty", "missing", "too-long"],
)
def test_icon_invalid_url(client: TestClient, params: dict[str, str]) -> None:
    """Test that invalid URLs are rejected with a 400."""
    response = client.get("/api/v1/icon", params=params)

    assert response.status_code == 400


def test_metadata(client: TestClient, fake_origin: FakeOrigin) -> None:
    """Test that a page's details are returned from a single fetch."""
    fake_origin.add_html(
        "https://example.com/",
        """
        <html><head>
          <title>Example Site</title>
          <meta name="description" content="An example">
          <meta property="og:image" content="https://cdn.example.com/share.png">
        </head></html>
        """,
    )

    response = client.post("/api/v1/metadata", json={"url": "https://example.com/"})

    assert response.status_code == 200
    assert response.json() == {
        "title": "Example Site",
        "description": "An example",
        "icon_url": "https://cdn.example.com/share.png",
        "icon_type": "html",
    }
    assert fake_origin.calls("https://example.com/", method="GET") == 1


def test_metadata_page_error(client: TestClient, fake_origin: FakeOrigin) -> None:
    """Test that a page that can't be fetched answers with a 502."""
    fake_origin.add("https://example.com/", 500)

    response = client.post("/api/v1/metadata", json={"url": "https://example.com/"})

    assert response.status_code == 502
    assert response.json() == {
        "detail": "Failed to fetch the page, please fill in the details manually"
    }


@pytest.mark.parametrize("body", [{"url": "not a url"}, {"url": "mailto:a@b.c"}, {}])
def test_metadata_invalid_request(client: TestClient, body: dict[str, str]) -> None:
    """Test that invalid metadata requests are rejected with a 400."""
    response = client.post("/api/v1/metadata", json=body)

    assert response.status_code == 400


@pytest.mark.parametrize(
    ["error", "status_code", "detail"],
    [
        (httpx.ConnectError("Name or service not known"), 400, "Unable to reach this URL"),
        (
            httpx.ReadTimeout("timed out"),
            408,
            "Timed out fetching the page, please check that the URL is reachable",
        ),
    ],
    ids=["unreachable", "timeout"],
)
def test_metadata_network_failure(
    client: TestClient,
    fake_origin: FakeOrigin,
    error: Exception,
    status_code: int,
    detail: str,
) -> None:
    """Test that network failures are reported with a status telling them apart."""
    fake_origin.fail("https://example.com/", error)

    response = client.post("/api/v1/metadata", json={"url": "https://example.com/"})

    assert response.status_code == status_code
    assert response.json() == {"detail": detail}


def test_metadata_page_not_found(client: TestClient) -> None:
    """Test that a page answering with a 404 is reported as a 404."""
    response = client.post("/api/v1/metadata", json={"url": "https://example.com/missing"})

    assert response.status_code == 404
    assert response.json() == {"detail": "The page does not exist"}
