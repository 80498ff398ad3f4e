import logging
from dataclasses import replace
from datetime import UTC, datetime

from domain.models.currency import RefreshResult
from infrastructure.cache.redis_cache import RedisCacheService
from infrastructure.persistence.rate_store import RateStore
from infrastructure.providers.base import RateSource

logger = logging.getLogger(__name__)


class RateService:
	def __init__(
		self,
		rate_store: RateStore,
		rate_source: RateSource,
		cache: RedisCacheService | None = None,
	):
		self.rate_store = rate_store
		self.rate_source = rate_source
		self.cache = cache
		self.last_update: datetime = datetime.now(UTC)

	async def update_exchange_rates(self) -> RefreshResult:
		"""Refresh every stored rate from the rate source.

		Failures are reported for the whole batch: if anything goes wrong,
		``failed`` is the number of stored entries. Entries written before
		the failure keep their new values.
		"""
		updated = 0
		failed = 0

		try:
			latest = await self.rate_source.fetch_latest_rates(self.rate_store.snapshot())
			now = datetime.now(UTC)

			for key, new_rate in latest.items():
				current = self.rate_store.get_by_key(key)
				if current is None:
					logger.warning(f'{self.rate_source.name} returned unknown pair {key}; ignoring')
					continue
				if new_rate <= 0:
					raise ValueError(f'{self.rate_source.name} returned non-positive rate for {key}')

				self.rate_store.put(replace(current, rate=new_rate, last_updated=now))
				updated += 1

			self.last_update = now

		except Exception:
			logger.error('Failed to update exchange rates', exc_info=True)
			failed = len(self.rate_store)

		logger.info(
			f'Exchange rate refresh via {self.rate_source.name}: {updated} updated, {failed} failed'
		)

		if self.cache is not None and not failed:
			await self._publish_snapshot()

		return RefreshResult(updated=updated, failed=failed, last_update=self.last_update)

	async def _publish_snapshot(self) -> None:
		try:
			await self.cache.set_snapshot(self.rate_store.entries())
		except Exception as e:
			logger.warning(f'Could not publish rate snapshot: {e}')
