import logging
from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from domain.exceptions.currency import StorageError, StoreReadError
from domain.models.currency import CanonicalCurrency, RateSnapshot
from infrastructure.persistence.models.rates import CurrencyRateDB

logger = logging.getLogger(__name__)


class RateSnapshotRepository:
	"""Append-only store of rate snapshots, keyed by base currency."""

	def __init__(self, db_session: AsyncSession):
		self.db_session = db_session

	async def get_latest(self, base: CanonicalCurrency) -> RateSnapshot | None:
		stmt = (
			select(CurrencyRateDB)
			.filter(CurrencyRateDB.base == base.value)
			.order_by(CurrencyRateDB.created_at.desc(), CurrencyRateDB.id.desc())
			.limit(1)
		)
		try:
			result = await self.db_session.execute(stmt)
			row = result.scalars().first()
		except SQLAlchemyError as e:
			await self.db_session.rollback()
			raise StoreReadError(f'Failed to read latest {base.value} rates: {e}') from e

		if row is None:
			return None
		return self._to_domain(row)

	async def add(self, snapshot: RateSnapshot) -> RateSnapshot:
		"""Insert a snapshot and return it as read back from the store."""
		row = CurrencyRateDB(
			base=snapshot.base.value,
			rates={code: float(rate) for code, rate in snapshot.rates.items()},
			created_at=snapshot.created_at,
			requested_by=snapshot.requested_by,
		)
		try:
			self.db_session.add(row)
			await self.db_session.flush()
			await self.db_session.refresh(row)
			await self.db_session.commit()
		except SQLAlchemyError as e:
			await self.db_session.rollback()
			raise StorageError(f'Failed to insert {snapshot.base.value} rates: {e}') from e

		return self._to_domain(row)

	@staticmethod
	def _to_domain(row: CurrencyRateDB) -> RateSnapshot:
		return RateSnapshot(
			base=CanonicalCurrency(row.base),
			rates={code: Decimal(str(rate)) for code, rate in row.rates.items()},
			created_at=row.created_at,
			requested_by=row.requested_by,
		)
