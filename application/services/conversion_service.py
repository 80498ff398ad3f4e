import logging
from datetime import UTC, datetime
from decimal import Decimal

from domain.exceptions.currency import NoRateRouteError
from domain.models.catalog import fraction_digits
from domain.models.currency import ConversionResult, MultiCurrencyValue, VolatilityRisk
from domain.models.money import Amount, normalize_code, quantize, to_decimal
from infrastructure.persistence.rate_store import RateStore

logger = logging.getLogger(__name__)

# digits kept on the first leg of a conversion routed through the base currency
INTERMEDIATE_PRECISION = 8


class ConversionService:
	def __init__(self, rate_store: RateStore):
		self.rate_store = rate_store

	@property
	def base_currency(self) -> str:
		return self.rate_store.base_currency

	def convert(
		self,
		amount: Amount,
		from_currency: str,
		to_currency: str,
		precision: int | None = None,
	) -> ConversionResult:
		"""Convert ``amount`` using a direct, reverse or base-composed rate.

		``precision`` defaults to the fraction digits of the target currency.
		"""
		amount = to_decimal(amount)
		from_currency = normalize_code(from_currency)
		to_currency = normalize_code(to_currency)
		if precision is None:
			precision = fraction_digits(to_currency)
		elif precision < 0:
			raise ValueError(f'precision must be >= 0, got {precision}')

		if from_currency == to_currency:
			return ConversionResult(
				converted_amount=amount,
				exchange_rate=Decimal(1),
				last_updated=datetime.now(UTC),
				volatility_risk=VolatilityRisk.LOW,
			)

		exchange_rate = self.rate_store.get(from_currency, to_currency)
		if exchange_rate is not None:
			rate = exchange_rate.rate
		else:
			exchange_rate = self.rate_store.get(to_currency, from_currency)
			if exchange_rate is None:
				return self._convert_through_base(amount, from_currency, to_currency, precision)
			rate = Decimal(1) / exchange_rate.rate

		return ConversionResult(
			converted_amount=quantize(amount * rate, precision),
			exchange_rate=rate,
			last_updated=exchange_rate.last_updated,
			volatility_risk=VolatilityRisk.from_index(exchange_rate.volatility_index),
		)

	def _convert_through_base(
		self, amount: Decimal, from_currency: str, to_currency: str, precision: int
	) -> ConversionResult:
		base = self.base_currency
		# one leg is already the base currency, so a hop cannot help
		if base in (from_currency, to_currency):
			raise NoRateRouteError(from_currency, to_currency, base)

		logger.debug(f'No direct rate for {from_currency}->{to_currency}; routing through {base}')

		to_base = self.convert(amount, from_currency, base, INTERMEDIATE_PRECISION)
		to_target = self.convert(to_base.converted_amount, base, to_currency, precision)

		return ConversionResult(
			converted_amount=to_target.converted_amount,
			exchange_rate=to_base.exchange_rate * to_target.exchange_rate,
			last_updated=min(to_base.last_updated, to_target.last_updated),
			volatility_risk=VolatilityRisk.combine(
				to_base.volatility_risk, to_target.volatility_risk
			),
		)

	def calculate_multi_currency_value(
		self, base_amount: Amount, base_currency: str, target_currencies: list[str]
	) -> list[MultiCurrencyValue]:
		values = []
		for currency in target_currencies:
			conversion = self.convert(base_amount, base_currency, currency)
			values.append(
				MultiCurrencyValue(
					currency=normalize_code(currency),
					amount=conversion.converted_amount,
					exchange_rate=conversion.exchange_rate,
					volatility_risk=conversion.volatility_risk,
				)
			)
		return values
