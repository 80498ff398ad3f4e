class CurrencyException(Exception):
	pass


class InvalidCurrencyError(CurrencyException):
	pass


class NoRateRouteError(CurrencyException):
	"""No direct, reverse or base-currency route exists for a pair."""

	def __init__(self, from_currency: str, to_currency: str, base_currency: str):
		self.from_currency = from_currency
		self.to_currency = to_currency
		self.base_currency = base_currency
		super().__init__(
			f'No exchange rate route from {from_currency} to {to_currency} '
			f'(base currency {base_currency})'
		)


class IncompleteRateTableError(CurrencyException):
	def __init__(self, base_currency: str, missing: list[str]):
		self.base_currency = base_currency
		self.missing = missing
		super().__init__(
			f'Base currency {base_currency} has no stored rate for: {", ".join(missing)}'
		)


class ProviderError(CurrencyException):
	pass


class CacheError(CurrencyException):
	pass
