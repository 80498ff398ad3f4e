# nosec B101


import pytest
import json
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from unittest.mock import AsyncMock


from infrastructure.cache.redis_cache import RedisCacheService
from domain.models.currency import ExchangeRate, HistoricalRatePoint
from domain.exceptions.currency import CacheError


def make_rate(from_currency='USD', to_currency='YER', rate='250.0'):
    return ExchangeRate(
        from_currency=from_currency,
        to_currency=to_currency,
        rate=Decimal(rate),
        last_updated=datetime(2025, 11, 5, 10, 30, 0, tzinfo=UTC),
        source='central-bank',
        volatility_index=Decimal('0.15'),
    )


# ============================================================================
# TEST: rate snapshots
# ============================================================================

@pytest.mark.asyncio
async def test_set_snapshot_serializes_decimals_as_strings():
    mock_redis = AsyncMock()
    cache_service = RedisCacheService(redis_client=mock_redis)

    await cache_service.set_snapshot([make_rate(), make_rate('YER', 'USD', '0.004')])

    mock_redis.setex.assert_called_once()
    key, ttl, payload = mock_redis.setex.call_args[0]
    assert key == 'rates:snapshot'
    assert ttl == timedelta(hours=24)

    data = json.loads(payload)
    assert len(data) == 2
    assert data[0]['rate'] == '250.0'
    assert data[0]['volatility_index'] == '0.15'
    assert data[1]['from_currency'] == 'YER'
    assert data[1]['rate'] == '0.004'


# ============================================================================
# TEST: history series
# ============================================================================

@pytest.mark.asyncio
async def test_history_round_trips_through_cache_payload():
    mock_redis = AsyncMock()
    cache_service = RedisCacheService(redis_client=mock_redis)
    points = [
        HistoricalRatePoint(
            date=datetime(2025, 11, 4, tzinfo=UTC),
            rate=Decimal('0.004'),
            change=Decimal('0'),
            change_percent=Decimal('0'),
        ),
        HistoricalRatePoint(
            date=datetime(2025, 11, 5, tzinfo=UTC),
            rate=Decimal('0.0041'),
            change=Decimal('0.0001'),
            change_percent=Decimal('2.5'),
        ),
    ]

    await cache_service.set_history('YER', 'USD', 1, date(2025, 11, 5), points)

    key, _, payload = mock_redis.setex.call_args[0]
    assert key == 'history:YER:USD:1:2025-11-05'

    mock_redis.get.return_value = payload
    result = await cache_service.get_history('YER', 'USD', 1, date(2025, 11, 5))

    assert result == points
    mock_redis.get.assert_called_once_with('history:YER:USD:1:2025-11-05')


@pytest.mark.asyncio
async def test_get_history_cache_miss_returns_none():
    mock_redis = AsyncMock()
    mock_redis.get.return_value = None

    cache_service = RedisCacheService(redis_client=mock_redis)

    assert await cache_service.get_history('YER', 'USD', 30, date(2025, 11, 5)) is None


@pytest.mark.asyncio
async def test_close_closes_client():
    mock_redis = AsyncMock()
    cache_service = RedisCacheService(redis_client=mock_redis)

    await cache_service.close()

    mock_redis.aclose.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_history_malformed_json_raises_cache_error():
    mock_redis = AsyncMock()
    mock_redis.get.return_value = "{ invalid json }"

    cache_service = RedisCacheService(redis_client=mock_redis)

    with pytest.raises(CacheError) as exc_info:
        await cache_service.get_history('YER', 'USD', 30, date(2025, 11, 5))

    assert 'Invalid json data' in str(exc_info.value)


@pytest.mark.asyncio
async def test_get_history_missing_field_raises_cache_error():
    mock_redis = AsyncMock()
    mock_redis.get.return_value = json.dumps([{'date': '2025-11-05T00:00:00+00:00', 'rate': '1'}])

    cache_service = RedisCacheService(redis_client=mock_redis)

    with pytest.raises(CacheError):
        await cache_service.get_history('YER', 'USD', 30, date(2025, 11, 5))
