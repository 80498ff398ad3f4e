from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	BASE_CURRENCY: str = 'YER'

	# Rates
	RATE_SOURCE: Literal['simulated', 'openexchange'] = 'simulated'
	OPENEXCHANGE_APP_ID: str = ''
	PROVIDER_TIMEOUT: int = 10
	RATE_REFRESH_INTERVAL_SECONDS: int = 0

	# Empty disables the cache
	REDIS_URL: str = ''

	HISTORY_SEED: int | None = None
	DEFAULT_LOCALE: str = 'ar-YE'

	# Logging
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False
	LOG_DIRECTORY: str = ''

	# Application
	APP_NAME: str = 'Currency Engine API'
	HOST: str = '0.0.0.0'
	PORT: int = 8000
	DEBUG: bool = False

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
