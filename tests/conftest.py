# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations shared by every test directory."""

import os

os.environ.setdefault("LINKMARK_ENV", "testing")

from logging import LogRecord  # noqa: E402

import aiodogstatsd  # noqa: E402
import pytest  # noqa: E402
from pytest_mock import MockerFixture  # noqa: E402

from linkmark.icons.http import AsyncIconFetcher  # noqa: E402
from tests.fixtures.fake_origin import FakeOrigin  # noqa: E402
from tests.types import FilterCaplogFixture  # noqa: E402


@pytest.fixture(scope="session", name="filter_caplog")
def fixture_filter_caplog() -> FilterCaplogFixture:
    """
    Return a function that will filter pytest captured log records for a given logger
    name
    """

    def filter_caplog(records: list[LogRecord], logger_name: str) -> list[LogRecord]:
        """
        Filter pytest captured log records for a given logger name
        """
        return [record for record in records if record.name == logger_name]

    return filter_caplog


@pytest.fixture(name="statsd_mock")
def fixture_statsd_mock(mocker: MockerFixture) -> aiodogstatsd.Client:
    """Create a StatsD client mock object for testing."""
    mock = mocker.MagicMock(spec=aiodogstatsd.Client)
    mock.timeit.return_value = mocker.MagicMock()
    return mock


@pytest.fixture(name="fake_origin")
def fixture_fake_origin() -> FakeOrigin:
    """Return an empty fake origin. Every unregistered URL answers with a 404."""
    return FakeOrigin()


@pytest.fixture(name="fetcher")
def fixture_fetcher(fake_origin: FakeOrigin) -> AsyncIconFetcher:
    """Return a fetcher whose requests are served by `fake_origin`."""
    return AsyncIconFetcher(session=fake_origin.client(), page_timeout=1.0, check_timeout=1.0)
