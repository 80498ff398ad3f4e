"""
Shared fixtures: a freshly seeded store and engine per test.
"""

import random
from datetime import UTC, datetime

import pytest

from application.engine import CurrencyEngine, create_currency_engine
from config.settings import Settings
from infrastructure.persistence.rate_store import RateStore
from infrastructure.providers import SimulatedRateSource
from domain.models.catalog import SEED_RATES

SEEDED_AT = datetime(2025, 11, 5, 10, 30, 0, tzinfo=UTC)


@pytest.fixture
def settings():
    return Settings(_env_file=None, BASE_CURRENCY='YER', RATE_SOURCE='simulated')


@pytest.fixture
def rate_store():
    return RateStore.seeded('YER', SEED_RATES, now=SEEDED_AT)


@pytest.fixture
def rate_source():
    return SimulatedRateSource(rng=random.Random(42))


@pytest.fixture
def engine(settings, rate_source) -> CurrencyEngine:
    return create_currency_engine(settings, rate_source=rate_source)
