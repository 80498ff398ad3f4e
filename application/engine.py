"""
The currency engine: one explicitly constructed object bundling the rate
store with conversion, refresh, presentation and history services.

Build it with ``create_currency_engine()`` and pass it to whoever needs it.
"""
import logging
from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal

from application.services import ConversionService, CurrencyService, HistoryService, RateService
from application.services.currency_service import DEFAULT_LOCALE
from application.services.history_service import DEFAULT_HISTORY_DAYS
from config.settings import Settings, get_settings
from domain.models.catalog import DEFAULT_BASE_CURRENCY, SEED_RATES, rebase_seed_rates
from domain.models.currency import (
	ConversionResult,
	CurrencyInfo,
	HistoricalRatePoint,
	MultiCurrencyValue,
	RefreshResult,
)
from domain.models.money import Amount
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.rate_store import RateStore
from infrastructure.providers import OpenExchangeRateSource, RateSource, SimulatedRateSource

logger = logging.getLogger(__name__)


class CurrencyEngine:
	def __init__(
		self,
		rate_store: RateStore,
		rate_source: RateSource,
		cache: RedisCacheService | None = None,
		history_seed: int | None = None,
		default_locale: str = DEFAULT_LOCALE,
	):
		self.rate_store = rate_store
		self.cache = cache
		self.default_locale = default_locale

		self.conversion_service = ConversionService(rate_store)
		self.currency_service = CurrencyService(rate_store)
		self.history_service = HistoryService(rate_store, seed=history_seed)
		self.rate_service = RateService(rate_store, rate_source, cache=cache)

	@property
	def base_currency(self) -> str:
		return self.rate_store.base_currency

	@property
	def last_update(self) -> datetime:
		return self.rate_service.last_update

	def convert(
		self,
		amount: Amount,
		from_currency: str,
		to_currency: str,
		precision: int | None = None,
	) -> ConversionResult:
		return self.conversion_service.convert(amount, from_currency, to_currency, precision)

	def calculate_multi_currency_value(
		self, base_amount: Amount, base_currency: str, target_currencies: list[str]
	) -> list[MultiCurrencyValue]:
		return self.conversion_service.calculate_multi_currency_value(
			base_amount, base_currency, target_currencies
		)

	def get_supported_currencies(self) -> list[CurrencyInfo]:
		return self.currency_service.get_supported_currencies()

	def format_currency(self, amount: Amount, currency: str, locale: str | None = None) -> str:
		return self.currency_service.format_currency(amount, currency, locale or self.default_locale)

	def get_historical_rates(
		self, from_currency: str, to_currency: str, days: int = DEFAULT_HISTORY_DAYS
	) -> list[HistoricalRatePoint]:
		return self.history_service.get_historical_rates(from_currency, to_currency, days)

	async def update_exchange_rates(self) -> RefreshResult:
		return await self.rate_service.update_exchange_rates()

	async def close(self) -> None:
		await self.rate_service.rate_source.close()
		if self.cache is not None:
			await self.cache.close()


def build_rate_source(settings: Settings) -> RateSource:
	if settings.RATE_SOURCE == 'openexchange':
		return OpenExchangeRateSource(
			app_id=settings.OPENEXCHANGE_APP_ID,
			base_currency=settings.BASE_CURRENCY.upper(),
			timeout=settings.PROVIDER_TIMEOUT,
		)
	return SimulatedRateSource()


def create_currency_engine(
	settings: Settings | None = None,
	rate_source: RateSource | None = None,
	cache: RedisCacheService | None = None,
	seed_rates: Mapping[str, tuple[Decimal, Decimal]] | None = None,
) -> CurrencyEngine:
	"""Seed a rate store and wire up an engine around it.

	The built-in seed table is rebased when the configured base currency is
	not YER. Raises ``IncompleteRateTableError`` if the base currency lacks a
	rate to any seeded currency.
	"""
	settings = settings or get_settings()
	base_currency = settings.BASE_CURRENCY.upper()
	if seed_rates is None:
		seed_rates = rebase_seed_rates(SEED_RATES, DEFAULT_BASE_CURRENCY, base_currency)

	rate_store = RateStore.seeded(base_currency, seed_rates)
	rate_store.assert_base_complete(seed_rates.keys())

	engine = CurrencyEngine(
		rate_store=rate_store,
		rate_source=rate_source or build_rate_source(settings),
		cache=cache,
		history_seed=settings.HISTORY_SEED,
		default_locale=settings.DEFAULT_LOCALE,
	)
	logger.info(
		f'Currency engine ready: base {base_currency}, {len(rate_store)} rates, '
		f'source {engine.rate_service.rate_source.name}'
	)
	return engine
