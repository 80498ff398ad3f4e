import logging
from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status
from redis.exceptions import RedisError

from api.dependencies import get_engine, get_history_cache
from api.schemas import (
	ConversionRequest,
	ConversionResponse,
	CurrencyInfoResponse,
	CurrencyValueResponse,
	FormattedAmountResponse,
	HistoricalRatePointResponse,
	HistoricalRatesResponse,
	MultiCurrencyRequest,
	MultiCurrencyResponse,
	RefreshResponse,
	SupportedCurrenciesResponse,
)
from application.engine import CurrencyEngine
from domain.exceptions.currency import CacheError
from infrastructure.cache.redis_cache import RedisCacheService

logger = logging.getLogger(__name__)

router = APIRouter(prefix='/api/currency', tags=['currency'])

CurrencyCode = Annotated[str, Path(min_length=3, max_length=3)]


@router.get(
	'/rates',
	response_model=SupportedCurrenciesResponse,
	status_code=status.HTTP_200_OK,
	summary='List supported currencies with their current rates',
)
async def get_currency_rates(
	engine: Annotated[CurrencyEngine, Depends(get_engine)],
) -> SupportedCurrenciesResponse:
	return SupportedCurrenciesResponse(
		base_currency=engine.base_currency,
		currencies=[
			CurrencyInfoResponse(
				code=info.code,
				name=info.name,
				symbol=info.symbol,
				rate_to_base=info.rate_to_base,
				volatility=info.volatility,
				region=info.region,
			)
			for info in engine.get_supported_currencies()
		],
	)


@router.post(
	'/convert',
	response_model=ConversionResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert currency amount',
)
async def convert_currency(
	request: ConversionRequest,
	engine: Annotated[CurrencyEngine, Depends(get_engine)],
) -> ConversionResponse:
	result = engine.convert(
		request.amount, request.from_currency, request.to_currency, request.precision
	)
	return ConversionResponse(
		from_currency=request.from_currency,
		to_currency=request.to_currency,
		original_amount=request.amount,
		converted_amount=result.converted_amount,
		exchange_rate=result.exchange_rate,
		last_updated=result.last_updated,
		volatility_risk=result.volatility_risk,
	)


@router.post(
	'/multi-convert',
	response_model=MultiCurrencyResponse,
	status_code=status.HTTP_200_OK,
	summary='Value an amount in several currencies',
)
async def multi_convert(
	request: MultiCurrencyRequest,
	engine: Annotated[CurrencyEngine, Depends(get_engine)],
) -> MultiCurrencyResponse:
	values = engine.calculate_multi_currency_value(
		request.amount, request.base_currency, request.target_currencies
	)
	return MultiCurrencyResponse(
		base_currency=request.base_currency,
		amount=request.amount,
		values=[
			CurrencyValueResponse(
				currency=value.currency,
				amount=value.amount,
				exchange_rate=value.exchange_rate,
				volatility_risk=value.volatility_risk,
			)
			for value in values
		],
	)


@router.get(
	'/historical/{from_currency}/{to_currency}',
	response_model=HistoricalRatesResponse,
	status_code=status.HTTP_200_OK,
	summary='Simulated rate history for charting',
)
async def get_historical_rates(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	engine: Annotated[CurrencyEngine, Depends(get_engine)],
	cache: Annotated[RedisCacheService | None, Depends(get_history_cache)],
	days: Annotated[int, Query(ge=1, le=365)] = 30,
) -> HistoricalRatesResponse:
	from_currency = from_currency.upper()
	to_currency = to_currency.upper()
	today = engine.history_service.clock().date()

	points = None
	if cache is not None:
		try:
			points = await cache.get_history(from_currency, to_currency, days, today)
		except (CacheError, RedisError) as e:
			logger.warning(f'Ignoring cached history for {from_currency}->{to_currency}: {e}')

	if points is None:
		points = engine.get_historical_rates(from_currency, to_currency, days)
		if cache is not None:
			try:
				await cache.set_history(from_currency, to_currency, days, today, points)
			except RedisError as e:
				logger.warning(f'Could not cache history for {from_currency}->{to_currency}: {e}')

	return HistoricalRatesResponse(
		from_currency=from_currency,
		to_currency=to_currency,
		days=days,
		points=[
			HistoricalRatePointResponse(
				date=point.date,
				rate=point.rate,
				change=point.change,
				change_percent=point.change_percent,
			)
			for point in points
		],
	)


@router.post(
	'/update-rates',
	response_model=RefreshResponse,
	status_code=status.HTTP_200_OK,
	summary='Refresh all stored exchange rates',
)
async def update_rates(
	engine: Annotated[CurrencyEngine, Depends(get_engine)],
) -> RefreshResponse:
	result = await engine.update_exchange_rates()
	return RefreshResponse(
		updated=result.updated, failed=result.failed, last_update=result.last_update
	)


@router.get(
	'/format',
	response_model=FormattedAmountResponse,
	status_code=status.HTTP_200_OK,
	summary='Format an amount for display',
)
async def format_amount(
	amount: Decimal,
	currency: Annotated[str, Query(min_length=3, max_length=3)],
	engine: Annotated[CurrencyEngine, Depends(get_engine)],
	locale: str | None = None,
) -> FormattedAmountResponse:
	locale = locale or engine.default_locale
	currency = currency.upper()
	return FormattedAmountResponse(
		amount=amount,
		currency=currency,
		locale=locale,
		formatted=engine.format_currency(amount, currency, locale),
	)
