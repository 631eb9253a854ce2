import logging
from collections.abc import AsyncGenerator
from datetime import timedelta
from typing import Annotated

from fastapi import Depends, HTTPException, Query, status
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from application.services import (
	AliasResolver,
	ConversionService,
	MessageParser,
	RateCache,
	RateService,
	ReplyFormatter,
)
from config.settings import Settings, get_settings
from infrastructure.cache.refresh_lock import RedisRefreshLock
from infrastructure.persistence.database import Database
from infrastructure.persistence.repositories.rates import RateSnapshotRepository
from infrastructure.providers import FxRatesAPIProvider
from infrastructure.telegram.client import TelegramClient

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	db: Database | None = None
	redis_client: Redis | None = None
	refresh_lock: RedisRefreshLock | None = None
	provider: FxRatesAPIProvider | None = None
	telegram: TelegramClient | None = None


deps = AppDependencies()


def init_dependencies(settings: Settings) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')

	deps.db = Database(settings.DATABASE_URL)
	deps.provider = FxRatesAPIProvider(
		settings.FX_RATES_KEY,
		base_url=settings.FX_RATES_URL,
		places=settings.RATE_DECIMAL_PLACES,
		timeout=settings.HTTP_TIMEOUT_SECONDS,
	)
	deps.telegram = TelegramClient(
		settings.TG_TOKEN,
		base_url=settings.TELEGRAM_API_URL,
		timeout=settings.HTTP_TIMEOUT_SECONDS,
	)

	if settings.REFRESH_LOCK_ENABLED:
		deps.redis_client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
		deps.refresh_lock = RedisRefreshLock(
			deps.redis_client,
			lock_ttl=timedelta(seconds=settings.REFRESH_LOCK_TIMEOUT_SECONDS),
			wait_timeout=timedelta(seconds=settings.REFRESH_LOCK_WAIT_SECONDS),
		)
		logger.info('Refresh lock enabled')

	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.redis_client:
		await deps.redis_client.aclose()
	if deps.db:
		await deps.db.close()
	if deps.provider:
		await deps.provider.close()
	if deps.telegram:
		await deps.telegram.close()

	deps.db = deps.redis_client = deps.refresh_lock = deps.provider = deps.telegram = None
	logger.info('Cleanup complete')


def verify_secret(
	settings: Annotated[Settings, Depends(get_settings)],
	secret: Annotated[str | None, Query()] = None,
) -> None:
	if not settings.WEBHOOK_SECRET or secret != settings.WEBHOOK_SECRET:
		logger.warning('Rejected webhook call with a wrong secret')
		raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail='Not allowed')


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
	if deps.db is None:
		raise RuntimeError('Database is not initialized')

	async with deps.db.session() as session:
		yield session


def get_provider() -> FxRatesAPIProvider:
	if deps.provider is None:
		raise RuntimeError('Rate provider not initialized')
	return deps.provider


def get_telegram_client() -> TelegramClient:
	if deps.telegram is None:
		raise RuntimeError('Telegram client not initialized')
	return deps.telegram


def get_refresh_lock() -> RedisRefreshLock | None:
	return deps.refresh_lock


async def get_rate_repository(
	session: Annotated[AsyncSession, Depends(get_db_session)],
) -> RateSnapshotRepository:
	return RateSnapshotRepository(db_session=session)


async def get_rate_service(
	repository: Annotated[RateSnapshotRepository, Depends(get_rate_repository)],
	provider: Annotated[FxRatesAPIProvider, Depends(get_provider)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> RateService:
	return RateService(
		provider=provider,
		repository=repository,
		persist_requester=settings.PERSIST_REQUESTER,
	)


async def get_rate_cache(
	repository: Annotated[RateSnapshotRepository, Depends(get_rate_repository)],
	rate_service: Annotated[RateService, Depends(get_rate_service)],
	refresh_lock: Annotated[RedisRefreshLock | None, Depends(get_refresh_lock)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> RateCache:
	return RateCache(
		repository=repository,
		rate_service=rate_service,
		stale_after=timedelta(days=settings.RATES_STALE_AFTER_DAYS),
		refresh_lock=refresh_lock,
	)


async def get_conversion_service(
	rate_cache: Annotated[RateCache, Depends(get_rate_cache)],
	settings: Annotated[Settings, Depends(get_settings)],
) -> ConversionService:
	return ConversionService(
		parser=MessageParser(allow_fractional=settings.ALLOW_FRACTIONAL_AMOUNTS),
		resolver=AliasResolver(),
		rate_cache=rate_cache,
		formatter=ReplyFormatter(),
	)
