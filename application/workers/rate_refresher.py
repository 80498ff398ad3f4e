import asyncio
import logging

from application.engine import CurrencyEngine

logger = logging.getLogger(__name__)


class RateRefresher:
	"""
	Background task that refreshes the engine's rates on a fixed interval.

	Runs on the same event loop as the request handlers, so a refresh never
	interleaves with a conversion.
	"""

	def __init__(self, engine: CurrencyEngine, interval_seconds: float):
		if interval_seconds <= 0:
			raise ValueError(f'interval_seconds must be positive, got {interval_seconds}')
		self.engine = engine
		self.interval_seconds = interval_seconds
		self.is_running = False
		self.cycles = 0
		self._task: asyncio.Task | None = None

	async def run_cycle(self) -> None:
		self.cycles += 1
		result = await self.engine.update_exchange_rates()
		if result.failed:
			logger.warning(
				f'Refresh cycle #{self.cycles} failed for {result.failed} rates; '
				f'retrying in {self.interval_seconds}s'
			)

	async def run(self) -> None:
		"""Refresh until stopped or cancelled."""
		self.is_running = True
		logger.info(f'Rate refresher started (every {self.interval_seconds}s)')

		while self.is_running:
			try:
				await asyncio.sleep(self.interval_seconds)
				await self.run_cycle()
			except asyncio.CancelledError:
				logger.info('Rate refresher received cancellation signal')
				break
			except Exception as e:
				logger.error(f'Error in refresh cycle: {e}', exc_info=True)

		self.is_running = False
		logger.info('Rate refresher stopped')

	def start(self) -> asyncio.Task:
		self._task = asyncio.create_task(self.run())
		return self._task

	async def stop(self) -> None:
		self.is_running = False
		if self._task is not None:
			self._task.cancel()
			try:
				await self._task
			except asyncio.CancelledError:
				pass
			self._task = None
