import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from redis import asyncio as redis
from redis.exceptions import LockError, RedisError

from domain.models.currency import CanonicalCurrency

logger = logging.getLogger(__name__)


class RedisRefreshLock:
    """Per-base lock so that concurrent stale requests share a single refresh.

    Acquisition is best effort: if the lock cannot be taken in time, or redis
    is unreachable, the caller proceeds without it.
    """

    def __init__(
        self,
        redis_client: redis.Redis,
        lock_ttl: timedelta = timedelta(seconds=30),
        wait_timeout: timedelta = timedelta(seconds=10),
    ):
        self.redis = redis_client
        self.lock_ttl = lock_ttl
        self.wait_timeout = wait_timeout

    def _make_lock_key(self, base: CanonicalCurrency) -> str:
        return f"rates:refresh:{base.value}"

    @asynccontextmanager
    async def hold(self, base: CanonicalCurrency) -> AsyncIterator[bool]:
        lock = self.redis.lock(
            self._make_lock_key(base),
            timeout=self.lock_ttl.total_seconds(),
            blocking_timeout=self.wait_timeout.total_seconds(),
        )
        try:
            acquired = await lock.acquire()
        except RedisError as e:
            logger.warning(f"Refresh lock for {base.value} unavailable: {e}")
            acquired = False

        if not acquired:
            logger.warning(f"Refreshing {base.value} rates without lock")

        try:
            yield acquired
        finally:
            if acquired:
                try:
                    await lock.release()
                except (LockError, RedisError) as e:
                    logger.warning(f"Refresh lock for {base.value} was lost before release: {e}")
