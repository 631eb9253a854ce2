from datetime import datetime

from sqlalchemy import JSON, BigInteger, DateTime, Index, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
	pass


class CurrencyRateDB(Base):
	__tablename__ = 'currency_rates'

	id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
	base: Mapped[str] = mapped_column(String(3), nullable=False)
	rates: Mapped[dict] = mapped_column(JSON, nullable=False)
	created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
	requested_by: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

	__table_args__ = (
		Index('idx_currency_rates_base_created_at', 'base', 'created_at'),
	)
