"""
Static reference data for the currencies the engine knows about.

Seed rates are expressed as units of the base currency (YER) per one unit of
the currency, together with the configured volatility index of the pair.
"""
from decimal import Decimal

from domain.models.currency import CurrencyDescriptor

DEFAULT_BASE_CURRENCY = 'YER'
DEFAULT_RATE_SOURCE = 'central-bank'

LISTED_CURRENCIES: tuple[str, ...] = (
	'YER',
	'USD',
	'EUR',
	'GBP',
	'SAR',
	'AED',
	'QAR',
	'KWD',
	'BHD',
	'OMR',
	'EGP',
	'JOD',
	'LBP',
	'IQD',
	'SYP',
)

THREE_DECIMAL_CURRENCIES = frozenset({'KWD', 'BHD', 'OMR'})


# code -> (base units per unit, volatility index)
SEED_RATES: dict[str, tuple[Decimal, Decimal]] = {
	'USD': (Decimal('250.0'), Decimal('0.15')),
	'EUR': (Decimal('270.0'), Decimal('0.12')),
	'GBP': (Decimal('315.0'), Decimal('0.14')),
	'SAR': (Decimal('66.7'), Decimal('0.05')),  # pegged
	'AED': (Decimal('68.1'), Decimal('0.05')),
	'QAR': (Decimal('68.7'), Decimal('0.05')),
	'KWD': (Decimal('820.0'), Decimal('0.08')),
	'BHD': (Decimal('663.0'), Decimal('0.08')),
	'OMR': (Decimal('650.0'), Decimal('0.08')),
	'EGP': (Decimal('5.1'), Decimal('0.20')),
	'JOD': (Decimal('353.0'), Decimal('0.06')),
}


CURRENCY_DESCRIPTORS: dict[str, CurrencyDescriptor] = {
	descriptor.code: descriptor
	for descriptor in (
		CurrencyDescriptor('YER', 'Yemen Rial', '﷼', 'MENA'),
		CurrencyDescriptor('USD', 'US Dollar', '$', 'Americas'),
		CurrencyDescriptor('EUR', 'Euro', '€', 'Europe'),
		CurrencyDescriptor('GBP', 'British Pound', '£', 'Europe'),
		CurrencyDescriptor('SAR', 'Saudi Riyal', 'ر.س', 'MENA'),
		CurrencyDescriptor('AED', 'UAE Dirham', 'د.إ', 'MENA'),
		CurrencyDescriptor('QAR', 'Qatari Riyal', 'ر.ق', 'MENA'),
		CurrencyDescriptor('KWD', 'Kuwaiti Dinar', 'د.ك', 'MENA'),
		CurrencyDescriptor('BHD', 'Bahraini Dinar', '.د.ب', 'MENA'),
		CurrencyDescriptor('OMR', 'Omani Rial', 'ر.ع.', 'MENA'),
		CurrencyDescriptor('EGP', 'Egyptian Pound', 'ج.م', 'MENA'),
		CurrencyDescriptor('JOD', 'Jordanian Dinar', 'د.ا', 'MENA'),
	)
}

FALLBACK_REGION = 'Global'


def fraction_digits(currency: str) -> int:
	return 3 if currency in THREE_DECIMAL_CURRENCIES else 2


def rebase_seed_rates(
	seed_rates: dict[str, tuple[Decimal, Decimal]],
	seed_base: str,
	new_base: str,
) -> dict[str, tuple[Decimal, Decimal]]:
	"""Re-express a seed table against another base currency.

	The old base joins the table with the new base's volatility.
	"""
	if new_base == seed_base:
		return dict(seed_rates)
	if new_base not in seed_rates:
		raise ValueError(f'Cannot rebase seed rates on {new_base}: no seed rate against {seed_base}')

	new_base_per_unit, new_base_volatility = seed_rates[new_base]
	rebased = {seed_base: (Decimal(1) / new_base_per_unit, new_base_volatility)}
	for code, (per_unit, volatility) in seed_rates.items():
		if code != new_base:
			rebased[code] = (per_unit / new_base_per_unit, volatility)
	return rebased
