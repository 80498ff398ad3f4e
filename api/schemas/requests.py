from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ConversionRequest(BaseModel):
	amount: Decimal = Field(..., ge=0)
	from_currency: str = Field(..., min_length=3, max_length=3)
	to_currency: str = Field(..., min_length=3, max_length=3)
	precision: int | None = Field(None, ge=0, le=8)

	@field_validator('from_currency', 'to_currency')
	@classmethod
	def uppercase_currency(cls, v: str):
		return v.upper()

	model_config = ConfigDict(
		json_schema_extra={
			'example': {'amount': 1000, 'from_currency': 'USD', 'to_currency': 'YER'}
		}
	)


class MultiCurrencyRequest(BaseModel):
	amount: Decimal = Field(..., ge=0)
	base_currency: str = Field(..., min_length=3, max_length=3)
	target_currencies: list[str] = Field(..., min_length=1)

	@field_validator('base_currency')
	@classmethod
	def uppercase_base(cls, v: str):
		return v.upper()

	@field_validator('target_currencies')
	@classmethod
	def uppercase_targets(cls, v: list[str]):
		for code in v:
			if len(code) != 3:
				raise ValueError(f'Invalid currency code: {code}')
		return [code.upper() for code in v]

	model_config = ConfigDict(
		json_schema_extra={
			'example': {
				'amount': 5000000,
				'base_currency': 'YER',
				'target_currencies': ['USD', 'SAR', 'EUR'],
			}
		}
	)
