# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations shared by all the tests."""

import os
from logging import LogRecord
from typing import Any

# Select the `testing` settings before anything reads `cumulus.config.settings`.
os.environ.setdefault("CUMULUS_ENV", "testing")

import pytest  # noqa: E402
from aiodogstatsd import Client  # noqa: E402
from pytest_mock import MockerFixture  # noqa: E402

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
def fixture_statsd_mock(mocker: MockerFixture) -> Any:
    """Create a StatsD client mock object for testing."""
    return mocker.MagicMock(spec=Client)
