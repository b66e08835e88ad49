# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the integration test directory."""

from typing import Iterator

import pytest
from starlette.testclient import TestClient

from linkmark.icons import get_fetcher, get_resolver
from linkmark.icons.http import AsyncIconFetcher
from linkmark.icons.resolver import IconResolver
from linkmark.main import app


@pytest.fixture(name="resolver")
def fixture_resolver(fetcher: AsyncIconFetcher, statsd_mock) -> IconResolver:
    """Return a resolver whose requests are served by the fake origin."""
    return IconResolver(
        fetcher=fetcher,
        metrics_client=statsd_mock,
        resolve_timeout=0,
        fallback_paths_enabled=False,
    )


@pytest.fixture(name="client")
def fixture_test_client(
    resolver: IconResolver, fetcher: AsyncIconFetcher
) -> Iterator[TestClient]:
    """Return a FastAPI TestClient instance wired to the fake origin.

    Note that this will NOT trigger event handlers (i.e. `startup` and `shutdown`) for
    the app, see: https://fastapi.tiangolo.com/advanced/testing-events/
    """
    app.dependency_overrides[get_resolver] = lambda: resolver
    app.dependency_overrides[get_fetcher] = lambda: fetcher
    yield TestClient(app)
    app.dependency_overrides.clear()
