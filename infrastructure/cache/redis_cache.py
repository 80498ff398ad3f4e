import json
from datetime import date, datetime, timedelta
from decimal import Decimal, InvalidOperation

from redis import asyncio as redis

from domain.exceptions.currency import CacheError
from domain.models.currency import ExchangeRate, HistoricalRatePoint


class RedisCacheService:
	"""Publishes rate snapshots and keeps generated history series around."""

	SNAPSHOT_KEY = 'rates:snapshot'

	def __init__(self, redis_client: redis.Redis):
		self.redis = redis_client
		self.snapshot_ttl = timedelta(hours=24)
		self.history_ttl = timedelta(hours=24)

	def _make_history_key(self, from_currency: str, to_currency: str, days: int, day: date) -> str:
		return f'history:{from_currency}:{to_currency}:{days}:{day.isoformat()}'

	@staticmethod
	def _load(data: str) -> object:
		try:
			return json.loads(data)
		except json.JSONDecodeError as e:
			raise CacheError(f'Invalid json data in cache: {e}') from e

	async def set_snapshot(self, rates: list[ExchangeRate]) -> None:
		payload = [
			{
				'from_currency': rate.from_currency,
				'to_currency': rate.to_currency,
				'rate': str(rate.rate),
				'last_updated': rate.last_updated.isoformat(),
				'source': rate.source,
				'volatility_index': str(rate.volatility_index),
			}
			for rate in rates
		]
		await self.redis.setex(self.SNAPSHOT_KEY, self.snapshot_ttl, json.dumps(payload))

	async def get_history(
		self, from_currency: str, to_currency: str, days: int, day: date
	) -> list[HistoricalRatePoint] | None:
		data = await self.redis.get(self._make_history_key(from_currency, to_currency, days, day))
		if not data:
			return None

		try:
			return [
				HistoricalRatePoint(
					date=datetime.fromisoformat(item['date']),
					rate=Decimal(item['rate']),
					change=Decimal(item['change']),
					change_percent=Decimal(item['change_percent']),
				)
				for item in self._load(data)
			]
		except (KeyError, TypeError, InvalidOperation, ValueError) as e:
			raise CacheError(f'Malformed history series: {e}') from e

	async def set_history(
		self,
		from_currency: str,
		to_currency: str,
		days: int,
		day: date,
		points: list[HistoricalRatePoint],
	) -> None:
		payload = [
			{
				'date': point.date.isoformat(),
				'rate': str(point.rate),
				'change': str(point.change),
				'change_percent': str(point.change_percent),
			}
			for point in points
		]
		await self.redis.setex(
			self._make_history_key(from_currency, to_currency, days, day),
			self.history_ttl,
			json.dumps(payload),
		)

	async def close(self) -> None:
		await self.redis.aclose()
