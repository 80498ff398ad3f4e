from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from application.services import HistoryService
from domain.models.currency import HistoricalRatePoint

NOW = datetime(2025, 11, 5, 12, 0, 0, tzinfo=UTC)


def fixed_clock():
    return NOW


@pytest.fixture
def service(rate_store):
    return HistoryService(rate_store, clock=fixed_clock)


class TestSeriesShape:
    def test_default_is_thirty_one_points(self, service):
        points = service.get_historical_rates('YER', 'USD')

        assert len(points) == 31
        assert all(isinstance(point, HistoricalRatePoint) for point in points)

    def test_days_plus_one_points(self, service):
        assert len(service.get_historical_rates('YER', 'USD', 7)) == 8

    def test_zero_days_is_single_point_for_today(self, service):
        [point] = service.get_historical_rates('YER', 'USD', 0)

        assert point.date == NOW
        assert point.change == 0
        assert point.change_percent == 0

    def test_dates_run_oldest_first_one_day_apart(self, service):
        points = service.get_historical_rates('USD', 'YER', 10)

        assert points[0].date == NOW - timedelta(days=10)
        assert points[-1].date == NOW
        for earlier, later in zip(points, points[1:]):
            assert later.date - earlier.date == timedelta(days=1)

    def test_first_point_has_no_change(self, service):
        first = service.get_historical_rates('YER', 'EUR')[0]

        assert first.change == 0
        assert first.change_percent == 0

    def test_changes_are_relative_to_previous_point(self, service):
        points = service.get_historical_rates('USD', 'YER', 5)

        for previous, point in zip(points, points[1:]):
            assert point.change == point.rate - previous.rate
            assert point.change_percent == point.change / previous.rate * 100

    def test_negative_days_raises(self, service):
        with pytest.raises(ValueError):
            service.get_historical_rates('YER', 'USD', -1)


class TestRateBounds:
    @pytest.mark.parametrize('pair', [('YER', 'USD'), ('USD', 'YER'), ('EGP', 'YER'), ('YER', 'SAR')])
    def test_rates_stay_within_volatility_band(self, service, rate_store, pair):
        stored = rate_store.get(*pair)
        band = stored.volatility_index * Decimal('0.01')

        for point in service.get_historical_rates(*pair, days=60):
            assert abs(point.rate / stored.rate - 1) <= band

    def test_pair_without_direct_entry_uses_unit_rate_and_default_volatility(self, service):
        points = service.get_historical_rates('USD', 'EUR', 60)

        for point in points:
            assert abs(point.rate - 1) <= Decimal('0.0005')

    def test_codes_are_normalized(self, service, rate_store):
        stored = rate_store.get('YER', 'USD').rate

        for point in service.get_historical_rates(' yer ', 'usd', 3):
            assert abs(point.rate / stored - 1) <= Decimal('0.0015')


class TestSeeding:
    def test_seeded_series_is_reproducible(self, rate_store):
        first = HistoryService(rate_store, seed=7, clock=fixed_clock)
        second = HistoryService(rate_store, seed=7, clock=fixed_clock)

        assert first.get_historical_rates('YER', 'USD') == second.get_historical_rates('YER', 'USD')

    def test_seeded_point_depends_on_calendar_day_not_window(self, rate_store):
        service = HistoryService(rate_store, seed=7, clock=fixed_clock)

        short = service.get_historical_rates('YER', 'USD', 3)
        long = service.get_historical_rates('YER', 'USD', 30)

        assert [p.rate for p in short] == [p.rate for p in long[-4:]]

    def test_different_seeds_differ(self, rate_store):
        first = HistoryService(rate_store, seed=1, clock=fixed_clock)
        second = HistoryService(rate_store, seed=2, clock=fixed_clock)

        assert first.get_historical_rates('YER', 'USD') != second.get_historical_rates('YER', 'USD')

    def test_unseeded_series_vary_between_calls(self, service):
        first = [p.rate for p in service.get_historical_rates('YER', 'USD')]
        second = [p.rate for p in service.get_historical_rates('YER', 'USD')]

        assert first != second
