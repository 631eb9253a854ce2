import logging

from domain.models.currency import (
	CURRENCY_ALIASES,
	CanonicalCurrency,
	build_alias_table,
)

logger = logging.getLogger(__name__)


class AliasResolver:
	def __init__(self, aliases: dict[CanonicalCurrency, tuple[str, ...]] | None = None):
		self._table = build_alias_table(aliases or CURRENCY_ALIASES)

	def resolve(self, token: str) -> CanonicalCurrency | None:
		currency = self._table.get(token)
		if currency is None:
			logger.debug(f'Unknown currency alias {token!r}')
		return currency

	@property
	def aliases(self) -> frozenset[str]:
		return frozenset(self._table)
