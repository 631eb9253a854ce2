from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from enum import Enum


class CanonicalCurrency(str, Enum):
    # Declaration order is the order targets are requested from the provider
    USD = "USD"
    CZK = "CZK"
    UAH = "UAH"
    CAD = "CAD"
    EUR = "EUR"

    @classmethod
    def targets_for(cls, base: "CanonicalCurrency") -> list["CanonicalCurrency"]:
        return [currency for currency in cls if currency is not base]


CURRENCY_ALIASES: dict[CanonicalCurrency, tuple[str, ...]] = {
    CanonicalCurrency.EUR: ("eur", "euro", "євро", "євр", "еуро"),
    CanonicalCurrency.USD: ("usd", "us", "юсд"),
    CanonicalCurrency.UAH: ("uah", "юах", "грн", "гривень"),
    CanonicalCurrency.CAD: ("cad", "кад"),
    CanonicalCurrency.CZK: ("czk", "цзк"),
}


def build_alias_table(
    aliases: dict[CanonicalCurrency, tuple[str, ...]],
) -> dict[str, CanonicalCurrency]:
    return {
        alias.upper(): currency
        for currency, names in aliases.items()
        for alias in names
    }


def as_utc(value: datetime) -> datetime:
    """Treat naive timestamps (e.g. read back from SQLite) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


@dataclass(frozen=True)
class RateQuote:
    base: CanonicalCurrency
    rates: dict[str, Decimal]


@dataclass(frozen=True)
class RateSnapshot:
    base: CanonicalCurrency
    rates: dict[str, Decimal]
    created_at: datetime
    requested_by: int | None = None

    def is_fresh(self, now: datetime, max_age: timedelta) -> bool:
        return as_utc(now) - as_utc(self.created_at) < max_age


@dataclass(frozen=True)
class ParsedMessage:
    amount: Decimal
    alias: str


@dataclass(frozen=True)
class ConversionRequest:
    amount: Decimal
    base: CanonicalCurrency
    requester: int | None = field(default=None)
