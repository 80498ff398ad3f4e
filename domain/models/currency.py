from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum


class VolatilityRisk(str, Enum):
	LOW = 'low'
	MEDIUM = 'medium'
	HIGH = 'high'

	@property
	def severity(self) -> int:
		return _SEVERITY[self]

	@classmethod
	def from_index(cls, volatility_index: Decimal) -> 'VolatilityRisk':
		if volatility_index > HIGH_VOLATILITY_THRESHOLD:
			return cls.HIGH
		if volatility_index > MEDIUM_VOLATILITY_THRESHOLD:
			return cls.MEDIUM
		return cls.LOW

	@classmethod
	def combine(cls, *risks: 'VolatilityRisk') -> 'VolatilityRisk':
		"""The most severe of the given risks."""
		return max(risks, key=lambda risk: risk.severity)


HIGH_VOLATILITY_THRESHOLD = Decimal('0.15')
MEDIUM_VOLATILITY_THRESHOLD = Decimal('0.08')

_SEVERITY = {
	VolatilityRisk.LOW: 1,
	VolatilityRisk.MEDIUM: 2,
	VolatilityRisk.HIGH: 3,
}


def rate_key(from_currency: str, to_currency: str) -> str:
	return f'{from_currency}-{to_currency}'


@dataclass(frozen=True)
class ExchangeRate:
	from_currency: str
	to_currency: str
	rate: Decimal
	last_updated: datetime
	source: str
	volatility_index: Decimal

	@property
	def key(self) -> str:
		return rate_key(self.from_currency, self.to_currency)


@dataclass(frozen=True)
class CurrencyDescriptor:
	code: str
	name: str
	symbol: str
	region: str


@dataclass(frozen=True)
class CurrencyInfo:
	code: str
	name: str
	symbol: str
	rate_to_base: Decimal
	volatility: Decimal
	region: str


@dataclass(frozen=True)
class ConversionResult:
	converted_amount: Decimal
	exchange_rate: Decimal
	last_updated: datetime
	volatility_risk: VolatilityRisk


@dataclass(frozen=True)
class MultiCurrencyValue:
	currency: str
	amount: Decimal
	exchange_rate: Decimal
	volatility_risk: VolatilityRisk


@dataclass(frozen=True)
class RefreshResult:
	updated: int
	failed: int
	last_update: datetime


@dataclass(frozen=True)
class HistoricalRatePoint:
	date: datetime
	rate: Decimal
	change: Decimal
	change_percent: Decimal
