import random
from collections.abc import Mapping
from decimal import Decimal

from domain.models.currency import ExchangeRate
from infrastructure.providers.base import RateSource

DAILY_FLUCTUATION_SCALE = Decimal('0.01')


class SimulatedRateSource(RateSource):
	"""Random-walk stand-in for a market data feed.

	Each rate moves by at most ``volatility_index * 0.01`` of its value per refresh.
	"""

	def __init__(self, rng: random.Random | None = None):
		self._rng = rng or random.Random()

	@property
	def name(self) -> str:
		return 'simulated'

	def perturb(self, rate: ExchangeRate) -> Decimal:
		bound = rate.volatility_index * DAILY_FLUCTUATION_SCALE
		fluctuation = Decimal(str(self._rng.uniform(-1.0, 1.0))) * bound
		return rate.rate * (1 + fluctuation)

	async def fetch_latest_rates(self, current: Mapping[str, ExchangeRate]) -> dict[str, Decimal]:
		return {key: self.perturb(rate) for key, rate in current.items()}
