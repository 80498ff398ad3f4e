"""Decimal coercion and rounding shared by conversion, formatting and history."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from domain.exceptions.currency import InvalidCurrencyError

Amount = Decimal | int | float | str


def to_decimal(value: Amount) -> Decimal:
	# floats go through str so 0.1 stays 0.1
	if isinstance(value, Decimal):
		result = value
	elif isinstance(value, bool):
		raise InvalidCurrencyError(f'Not a numeric amount: {value!r}')
	elif isinstance(value, (int, float, str)):
		try:
			result = Decimal(str(value).strip())
		except InvalidOperation as e:
			raise InvalidCurrencyError(f'Not a numeric amount: {value!r}') from e
	else:
		raise InvalidCurrencyError(f'Not a numeric amount: {value!r}')

	if not result.is_finite():
		raise InvalidCurrencyError(f'Amount must be finite, got {value!r}')
	return result


def quantize(value: Decimal, precision: int) -> Decimal:
	if precision < 0:
		raise ValueError(f'precision must be >= 0, got {precision}')
	try:
		return value.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
	except InvalidOperation as e:
		raise InvalidCurrencyError(
			f'Amount {value} has too many digits to round to {precision} places'
		) from e


def normalize_code(code: str) -> str:
	if not isinstance(code, str) or not code.strip():
		raise InvalidCurrencyError(f'Invalid currency code: {code!r}')
	return code.strip().upper()
