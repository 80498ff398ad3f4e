from .requests import ConversionRequest, MultiCurrencyRequest
from .responses import (
	ConversionResponse,
	CurrencyInfoResponse,
	CurrencyValueResponse,
	FormattedAmountResponse,
	HealthResponse,
	HistoricalRatePointResponse,
	HistoricalRatesResponse,
	MultiCurrencyResponse,
	RefreshResponse,
	SupportedCurrenciesResponse,
)

__all__ = [
	'ConversionRequest',
	'MultiCurrencyRequest',
	'ConversionResponse',
	'CurrencyInfoResponse',
	'CurrencyValueResponse',
	'FormattedAmountResponse',
	'HealthResponse',
	'HistoricalRatePointResponse',
	'HistoricalRatesResponse',
	'MultiCurrencyResponse',
	'RefreshResponse',
	'SupportedCurrenciesResponse',
]
