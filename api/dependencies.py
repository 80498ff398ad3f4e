import logging

from redis.asyncio import Redis

from application.engine import CurrencyEngine, create_currency_engine
from application.workers.rate_refresher import RateRefresher
from config.settings import get_settings
from infrastructure.cache.redis_cache import RedisCacheService

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	engine: CurrencyEngine | None = None
	redis_cache: RedisCacheService | None = None
	refresher: RateRefresher | None = None


deps = AppDependencies()


def init_dependencies() -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = get_settings()

	if settings.REDIS_URL:
		deps.redis_cache = RedisCacheService(Redis.from_url(settings.REDIS_URL, decode_responses=True))

	deps.engine = create_currency_engine(settings, cache=deps.redis_cache)

	if settings.RATE_REFRESH_INTERVAL_SECONDS > 0:
		deps.refresher = RateRefresher(deps.engine, settings.RATE_REFRESH_INTERVAL_SECONDS)
		deps.refresher.start()

	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.refresher:
		await deps.refresher.stop()
		deps.refresher = None
	if deps.engine:
		await deps.engine.close()
		deps.engine = None
	deps.redis_cache = None

	logger.info('Cleanup complete')


def get_engine() -> CurrencyEngine:
	if deps.engine is None:
		raise RuntimeError('Currency engine not initialized')
	return deps.engine


def get_history_cache() -> RedisCacheService | None:
	return deps.redis_cache
