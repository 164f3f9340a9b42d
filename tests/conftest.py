from __future__ import annotations

from datetime import datetime

import pytest

from helpers import FakeTransport
from tenki.core.providers.kujira import JST


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 4, 17, 10, 30, tzinfo=JST)


@pytest.fixture()
def clock(fixed_now):
    return lambda: fixed_now
