import logging
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation

import httpx
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from domain.exceptions.currency import ProviderError
from domain.models.currency import ExchangeRate
from infrastructure.providers.base import RateSource

logger = logging.getLogger(__name__)


class OpenExchangeRateSource(RateSource):
	BASE_URL = 'https://openexchangerates.org/api'

	def __init__(
		self,
		app_id: str,
		base_currency: str,
		client: httpx.AsyncClient | None = None,
		timeout: int = 10,
	):
		self.app_id = app_id
		self.base_currency = base_currency
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'openexchange'

	@retry(
		stop=stop_after_attempt(3),
		wait=wait_exponential(multiplier=1, min=1, max=10),
		retry=retry_if_exception_type(httpx.TransportError),
		reraise=True,
	)
	async def _get(self, url: str, params: dict) -> httpx.Response:
		return await self._client.get(url, params=params)

	async def _request(self, endpoint: str, params: dict) -> dict:
		params['app_id'] = self.app_id
		url = f'{self.BASE_URL}/{endpoint}'

		try:
			response = await self._get(url, params)
			response.raise_for_status()
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'OpenExchange HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'OpenExchange request failed: {e.__class__.__name__}') from e
		except ValueError as e:
			raise ProviderError(f'OpenExchange response parsing error: {str(e)}') from e

		if 'error' in data:
			message = data.get('description', data.get('message', 'Unknown error'))
			raise ProviderError(f'OpenExchange API error: {message}')

		return data

	async def fetch_base_rates(self, symbols: list[str]) -> dict[str, Decimal]:
		"""Units of each symbol bought by one unit of the base currency."""
		data = await self._request(
			'latest.json', {'base': self.base_currency, 'symbols': ','.join(sorted(symbols))}
		)
		try:
			return {code: Decimal(str(value)) for code, value in data['rates'].items()}
		except (KeyError, AttributeError, InvalidOperation) as e:
			raise ProviderError('OpenExchange response has no usable rates') from e

	async def fetch_latest_rates(self, current: Mapping[str, ExchangeRate]) -> dict[str, Decimal]:
		symbols = {
			code
			for rate in current.values()
			for code in (rate.from_currency, rate.to_currency)
			if code != self.base_currency
		}
		if not symbols:
			return {}

		per_base = await self.fetch_base_rates(list(symbols))
		per_base[self.base_currency] = Decimal(1)

		latest: dict[str, Decimal] = {}
		for key, rate in current.items():
			from_rate = per_base.get(rate.from_currency)
			to_rate = per_base.get(rate.to_currency)
			if not from_rate or not to_rate:
				logger.warning(f'{self.name} returned no rate for {key}; keeping stored value')
				continue
			latest[key] = to_rate / from_rate

		return latest

	async def close(self) -> None:
		await self._client.aclose()
