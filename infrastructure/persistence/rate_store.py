import logging
from collections.abc import Iterable, Iterator, Mapping
from datetime import UTC, datetime
from decimal import Decimal

from domain.exceptions.currency import IncompleteRateTableError
from domain.models.catalog import DEFAULT_RATE_SOURCE
from domain.models.currency import ExchangeRate, rate_key

logger = logging.getLogger(__name__)


class RateStore:
	"""In-memory table of directed exchange rates keyed by ``"{from}-{to}"``.

	Entries are replaced in place on refresh and never removed.
	"""

	def __init__(self, base_currency: str, rates: Iterable[ExchangeRate] = ()):
		self.base_currency = base_currency
		self._rates: dict[str, ExchangeRate] = {}
		for rate in rates:
			self.put(rate)

	@classmethod
	def seeded(
		cls,
		base_currency: str,
		seed_rates: Mapping[str, tuple[Decimal, Decimal]],
		source: str = DEFAULT_RATE_SOURCE,
		now: datetime | None = None,
	) -> 'RateStore':
		"""Build a store holding both directions of every seeded pair.

		``seed_rates`` maps a currency code to ``(base units per unit, volatility)``.
		"""
		store = cls(base_currency)
		timestamp = now or datetime.now(UTC)

		for currency, (per_unit, volatility) in seed_rates.items():
			if per_unit <= 0:
				raise ValueError(f'Seed rate for {currency} must be positive, got {per_unit}')

			store.put(
				ExchangeRate(
					from_currency=base_currency,
					to_currency=currency,
					rate=Decimal(1) / per_unit,
					last_updated=timestamp,
					source=source,
					volatility_index=volatility,
				)
			)
			store.put(
				ExchangeRate(
					from_currency=currency,
					to_currency=base_currency,
					rate=per_unit,
					last_updated=timestamp,
					source=source,
					volatility_index=volatility,
				)
			)

		logger.info(f'Seeded {len(store)} exchange rates against {base_currency}')
		return store

	def get(self, from_currency: str, to_currency: str) -> ExchangeRate | None:
		return self._rates.get(rate_key(from_currency, to_currency))

	def get_by_key(self, key: str) -> ExchangeRate | None:
		return self._rates.get(key)

	def put(self, rate: ExchangeRate) -> None:
		self._rates[rate.key] = rate

	def keys(self) -> list[str]:
		return list(self._rates)

	def entries(self) -> list[ExchangeRate]:
		return list(self._rates.values())

	def snapshot(self) -> dict[str, ExchangeRate]:
		return dict(self._rates)

	def assert_base_complete(self, currencies: Iterable[str]) -> None:
		"""Raise unless the base currency has both directions stored for every currency."""
		missing = [
			currency
			for currency in currencies
			if currency != self.base_currency
			and (
				self.get(self.base_currency, currency) is None
				or self.get(currency, self.base_currency) is None
			)
		]
		if missing:
			raise IncompleteRateTableError(self.base_currency, missing)

	def __len__(self) -> int:
		return len(self._rates)

	def __contains__(self, key: object) -> bool:
		return key in self._rates

	def __iter__(self) -> Iterator[ExchangeRate]:
		return iter(self.entries())
