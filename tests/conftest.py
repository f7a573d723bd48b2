"""Shared fixtures."""

import pytest

from config.settings import Settings
from tests.fakes import POOL, QUOTE_POOL, FakeClock, RecordingSink


@pytest.fixture
def settings() -> Settings:
    """Settings pointing at the fake pools; the jetton uses the default 9 decimals."""
    return Settings(pool_address=POOL, quote_pool_address=QUOTE_POOL, asset_decimals=9)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
