from collections.abc import Mapping, Sequence
from decimal import ROUND_HALF_UP, Decimal, localcontext

SEPARATORS: tuple[str, ...] = ('🍎', '🍐', '🍊', '🍋', '🍌', '🍉', '🍇')

_CENT = Decimal('0.01')


def _digits(value: Decimal) -> int:
	return len(value.as_tuple().digits)


def convert(amount: Decimal, rate: Decimal) -> Decimal:
	"""Multiply without rounding, however long the amount is."""
	with localcontext() as ctx:
		ctx.prec = max(ctx.prec, _digits(amount) + _digits(rate))
		return amount * rate


def format_amount(value: Decimal) -> str:
	"""Round half-up to cents, group thousands and drop trailing zeros."""
	with localcontext() as ctx:
		# Room for every integer digit, the cents and a carry from rounding up
		ctx.prec = max(ctx.prec, value.adjusted() + 4)
		text = f'{value.quantize(_CENT, rounding=ROUND_HALF_UP):,f}'
	if '.' in text:
		text = text.rstrip('0').rstrip('.')
	return text


class ReplyFormatter:
	def __init__(self, separators: Sequence[str] = SEPARATORS):
		if not separators:
			raise ValueError('At least one separator is required')
		self.separators = tuple(separators)

	def format(self, amount: Decimal | int | float, rates: Mapping[str, Decimal]) -> str | None:
		if not rates:
			return None

		amount = Decimal(str(amount))
		reply = ''
		for index, (currency, rate) in enumerate(rates.items()):
			converted = convert(amount, Decimal(str(rate)))
			separator = self.separators[index % len(self.separators)]
			reply += f'{format_amount(converted)} {currency} {separator} '

		# Drop the final " <separator> "
		last_separator = self.separators[(len(rates) - 1) % len(self.separators)]
		return reply[: -(len(last_separator) + 2)]
