import logging
from decimal import Decimal

from babel import Locale, UnknownLocaleError
from babel.numbers import format_decimal

from domain.models.catalog import (
	CURRENCY_DESCRIPTORS,
	FALLBACK_REGION,
	LISTED_CURRENCIES,
	fraction_digits,
)
from domain.models.currency import CurrencyDescriptor, CurrencyInfo
from domain.models.money import Amount, normalize_code, quantize, to_decimal
from infrastructure.persistence.rate_store import RateStore

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = 'ar-YE'
FALLBACK_LOCALE = 'en_US'
RIGHT_TO_LEFT_PREFIX = 'ar'


class CurrencyService:
	def __init__(
		self,
		rate_store: RateStore,
		listed_currencies: tuple[str, ...] = LISTED_CURRENCIES,
		descriptors: dict[str, CurrencyDescriptor] = CURRENCY_DESCRIPTORS,
	):
		self.rate_store = rate_store
		self.listed_currencies = listed_currencies
		self.descriptors = descriptors

	def describe(self, code: str) -> CurrencyDescriptor:
		"""Descriptor for ``code``, or one built from the code itself."""
		descriptor = self.descriptors.get(code)
		if descriptor is None:
			return CurrencyDescriptor(code=code, name=code, symbol=code, region=FALLBACK_REGION)
		return descriptor

	def get_supported_currencies(self) -> list[CurrencyInfo]:
		base = self.rate_store.base_currency
		currencies = []
		for code in self.listed_currencies:
			descriptor = self.describe(code)
			rate = self.rate_store.get(code, base)
			currencies.append(
				CurrencyInfo(
					code=code,
					name=descriptor.name,
					symbol=descriptor.symbol,
					rate_to_base=rate.rate if rate else Decimal(1),
					volatility=rate.volatility_index if rate else Decimal(0),
					region=descriptor.region,
				)
			)
		return currencies

	def format_currency(self, amount: Amount, currency: str, locale: str = DEFAULT_LOCALE) -> str:
		currency = normalize_code(currency)
		symbol = self.describe(currency).symbol
		digits = fraction_digits(currency)

		number = format_decimal(
			quantize(to_decimal(amount), digits),
			format='#,##0.' + '0' * digits,
			locale=self._babel_locale(locale),
			numbering_system='default',
		)

		if locale.lower().startswith(RIGHT_TO_LEFT_PREFIX):
			return f'{number} {symbol}'
		return f'{symbol}{number}'

	@staticmethod
	def _babel_locale(locale: str) -> Locale:
		try:
			return Locale.parse(locale.replace('-', '_'))
		except (UnknownLocaleError, ValueError, TypeError) as e:
			logger.warning(f'Unknown locale {locale!r} ({e}); formatting with {FALLBACK_LOCALE}')
			return Locale.parse(FALLBACK_LOCALE)
