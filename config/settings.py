from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	DATABASE_URL: str = 'sqlite+aiosqlite:///./curr_conv_bot.db'

	REDIS_URL: str = 'redis://localhost:6379'
	REFRESH_LOCK_ENABLED: bool = False
	REFRESH_LOCK_TIMEOUT_SECONDS: float = Field(default=30, gt=0)
	REFRESH_LOCK_WAIT_SECONDS: float = Field(default=10, gt=0)

	# Telegram
	TG_TOKEN: str = ''
	TELEGRAM_API_URL: str = 'https://api.telegram.org'
	WEBHOOK_SECRET: str = ''

	# fxratesapi.com
	FX_RATES_KEY: str = ''
	FX_RATES_URL: str = 'https://api.fxratesapi.com'
	RATE_DECIMAL_PLACES: int = Field(default=3, ge=0)
	HTTP_TIMEOUT_SECONDS: float = Field(default=10, gt=0)

	# Conversion behaviour
	RATES_STALE_AFTER_DAYS: float = Field(default=1, gt=0)
	ALLOW_FRACTIONAL_AMOUNTS: bool = True
	PERSIST_REQUESTER: bool = True

	# Application
	APP_NAME: str = 'Currency Converter Bot'
	LOG_LEVEL: str = 'INFO'
	LOG_JSON: bool = False
	HOST: str = '0.0.0.0'
	PORT: int = 8000

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()
