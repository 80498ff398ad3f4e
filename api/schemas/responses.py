from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.currency import VolatilityRisk


class ConversionResponse(BaseModel):
	from_currency: str = Field(..., description='Source currency code')
	to_currency: str = Field(..., description='Target currency code')
	original_amount: Decimal = Field(..., description='Original amount requested')
	converted_amount: Decimal = Field(..., description='Converted amount')
	exchange_rate: Decimal = Field(..., description='Exchange rate used for conversion')
	last_updated: datetime = Field(..., description='When the oldest rate used was refreshed')
	volatility_risk: VolatilityRisk = Field(..., description='Risk tier of the rates used')

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'from_currency': 'USD',
				'to_currency': 'YER',
				'original_amount': 1000,
				'converted_amount': 250000.00,
				'exchange_rate': 250.0,
				'last_updated': '2025-09-27T10:30:00Z',
				'volatility_risk': 'medium',
			}
		}
	)


class CurrencyValueResponse(BaseModel):
	currency: str
	amount: Decimal
	exchange_rate: Decimal
	volatility_risk: VolatilityRisk


class MultiCurrencyResponse(BaseModel):
	base_currency: str
	amount: Decimal
	values: list[CurrencyValueResponse]


class CurrencyInfoResponse(BaseModel):
	code: str
	name: str
	symbol: str
	rate_to_base: Decimal
	volatility: Decimal
	region: str


class SupportedCurrenciesResponse(BaseModel):
	base_currency: str = Field(..., description='Currency all rates are expressed against')
	currencies: list[CurrencyInfoResponse] = Field(description='Supported currencies in display order')


class HistoricalRatePointResponse(BaseModel):
	date: datetime
	rate: Decimal
	change: Decimal
	change_percent: Decimal


class HistoricalRatesResponse(BaseModel):
	from_currency: str
	to_currency: str
	days: int
	points: list[HistoricalRatePointResponse]


class RefreshResponse(BaseModel):
	updated: int
	failed: int
	last_update: datetime


class FormattedAmountResponse(BaseModel):
	amount: Decimal
	currency: str
	locale: str
	formatted: str


class HealthResponse(BaseModel):
	status: str
	base_currency: str
	rates_stored: int
	last_update: datetime
