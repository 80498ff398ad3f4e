from abc import ABC, abstractmethod
from collections.abc import Mapping
from decimal import Decimal

from domain.models.currency import ExchangeRate


class RateSource(ABC):
	"""Something that can produce fresh rates for the pairs a store holds.

	``fetch_latest_rates`` receives the current entries keyed by ``"{from}-{to}"``
	and returns new rates for (a subset of) those keys. Keys it does not
	return are left untouched by the caller.
	"""

	@property
	@abstractmethod
	def name(self) -> str:
		...

	@abstractmethod
	async def fetch_latest_rates(
		self, current: Mapping[str, ExchangeRate]
	) -> dict[str, Decimal]:
		...

	async def close(self) -> None:
		return None
