# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Integration tests for the Dockerflow endpoints."""

import logging

import pytest
from pytest import LogCaptureFixture
from starlette.testclient import TestClient

from tests.types import FilterCaplogFixture


@pytest.mark.parametrize("endpoint", ["__heartbeat__", "__lbheartbeat__"])
def test_heartbeats(client: TestClient, endpoint: str) -> None:
    """Test that the heartbeat endpoints answer with an empty 200."""
    response = client.get(f"/{endpoint}")

    assert response.status_code == 200
    assert len(response.content) == 0


def test_error(
    client: TestClient, caplog: LogCaptureFixture, filter_caplog: FilterCaplogFixture
) -> None:
    """Test that the error endpoint answers with a 500 and logs an error."""
    caplog.set_level(logging.ERROR)

    response = client.get("/__error__")

    assert response.status_code == 500
    records = filter_caplog(caplog.records, "linkmark.web.dockerflow")
    assert len(records) == 1
    assert records[0].message == "The __error__ endpoint was called"
