import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from decimal import Decimal

from application.services.rate_service import RateService, utc_now
from domain.exceptions.currency import StoreReadError
from domain.models.currency import CanonicalCurrency, RateSnapshot
from infrastructure.cache.refresh_lock import RedisRefreshLock
from infrastructure.persistence.repositories.rates import RateSnapshotRepository

logger = logging.getLogger(__name__)

DEFAULT_STALE_AFTER = timedelta(days=1)


class RateCache:
    """Serves the newest stored snapshot while it is fresh, refreshing otherwise.

    Store read failures count as "no snapshot" and force a refresh. With a
    refresh lock configured, concurrent refreshes of one base are collapsed:
    freshness is checked again once the lock is held.
    """

    def __init__(
        self,
        repository: RateSnapshotRepository,
        rate_service: RateService,
        stale_after: timedelta = DEFAULT_STALE_AFTER,
        refresh_lock: RedisRefreshLock | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.repository = repository
        self.rate_service = rate_service
        self.stale_after = stale_after
        self.refresh_lock = refresh_lock
        self.clock = clock

    def is_fresh(self, snapshot: RateSnapshot | None) -> bool:
        return snapshot is not None and snapshot.is_fresh(self.clock(), self.stale_after)

    async def get_rates(
        self, base: CanonicalCurrency, requester: int | None = None
    ) -> dict[str, Decimal]:
        snapshot = await self._latest(base)
        if self.is_fresh(snapshot):
            logger.debug(f"Cache hit for {base.value} (created {snapshot.created_at.isoformat()})")
            return snapshot.rates

        logger.info(f"Cache miss for {base.value}, refreshing")
        if self.refresh_lock is None:
            return await self.rate_service.fetch_and_store(base, requester)

        async with self.refresh_lock.hold(base) as acquired:
            if acquired:
                snapshot = await self._latest(base)
                if self.is_fresh(snapshot):
                    logger.info(f"{base.value} refreshed concurrently, reusing it")
                    return snapshot.rates
            return await self.rate_service.fetch_and_store(base, requester)

    async def _latest(self, base: CanonicalCurrency) -> RateSnapshot | None:
        try:
            return await self.repository.get_latest(base)
        except StoreReadError as e:
            logger.warning(f"Treating {base.value} as uncached: {e}")
            return None
