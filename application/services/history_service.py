import random
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from domain.models.currency import HistoricalRatePoint
from domain.models.money import normalize_code
from infrastructure.persistence.rate_store import RateStore

HISTORICAL_SWING_SCALE = Decimal('0.02')
DEFAULT_HISTORY_VOLATILITY = Decimal('0.05')
DEFAULT_HISTORY_DAYS = 30


def _utc_now() -> datetime:
	return datetime.now(UTC)


class HistoryService:
	"""Synthetic rate history for charts.

	Each point is an independent perturbation of the currently stored rate.
	Without a ``seed`` every call produces a different series; with one, the
	point for a given pair and calendar day is always the same.
	"""

	def __init__(
		self,
		rate_store: RateStore,
		seed: int | None = None,
		clock: Callable[[], datetime] = _utc_now,
	):
		self.rate_store = rate_store
		self.seed = seed
		self.clock = clock
		self._rng = random.Random()

	def _random_for(self, from_currency: str, to_currency: str, day: datetime) -> float:
		if self.seed is None:
			return self._rng.random()
		return random.Random(f'{self.seed}:{from_currency}:{to_currency}:{day.date().isoformat()}').random()

	def get_historical_rates(
		self, from_currency: str, to_currency: str, days: int = DEFAULT_HISTORY_DAYS
	) -> list[HistoricalRatePoint]:
		if days < 0:
			raise ValueError(f'days must be >= 0, got {days}')

		from_currency = normalize_code(from_currency)
		to_currency = normalize_code(to_currency)

		stored = self.rate_store.get(from_currency, to_currency)
		base_rate = stored.rate if stored else Decimal(1)
		volatility = stored.volatility_index if stored else DEFAULT_HISTORY_VOLATILITY

		today = self.clock()
		points: list[HistoricalRatePoint] = []

		for offset in range(days, -1, -1):
			day = today - timedelta(days=offset)
			swing = (Decimal(str(self._random_for(from_currency, to_currency, day))) - Decimal('0.5'))
			rate = base_rate * (1 + swing * volatility * HISTORICAL_SWING_SCALE)

			previous = points[-1].rate if points else rate
			change = rate - previous
			change_percent = change / previous * 100 if previous > 0 else Decimal(0)

			points.append(
				HistoricalRatePoint(date=day, rate=rate, change=change, change_percent=change_percent)
			)

		return points
