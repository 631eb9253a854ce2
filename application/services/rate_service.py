import logging
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

from domain.models.currency import CanonicalCurrency, RateSnapshot
from infrastructure.persistence.repositories.rates import RateSnapshotRepository
from infrastructure.providers.fxratesapi import FxRatesAPIProvider

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(UTC)


class RateService:
    """Fetches a fresh snapshot from the provider and appends it to the store."""

    def __init__(
        self,
        provider: FxRatesAPIProvider,
        repository: RateSnapshotRepository,
        persist_requester: bool = True,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.provider = provider
        self.repository = repository
        self.persist_requester = persist_requester
        self.clock = clock

    async def fetch_and_store(
        self, base: CanonicalCurrency, requester: int | None = None
    ) -> dict[str, Decimal]:
        logger.info(f"Fetching {base.value} rates from {self.provider.name}")
        quote = await self.provider.fetch_rates(base, CanonicalCurrency.targets_for(base))

        stored = await self.repository.add(
            RateSnapshot(
                base=quote.base,
                rates=quote.rates,
                created_at=self.clock(),
                requested_by=requester if self.persist_requester else None,
            )
        )
        logger.info(f"Stored new {base.value} snapshot with {len(stored.rates)} rates")
        return stored.rates
