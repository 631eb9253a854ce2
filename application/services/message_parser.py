import re
from decimal import Decimal, InvalidOperation

from domain.models.currency import ParsedMessage

# Word characters, decimal separators and the Cyrillic block survive normalization
_NOISE = re.compile(r'[^A-Za-z0-9_.,\u0400-\u04FF]+')
_REQUEST = re.compile(r'([0-9]+(?:\.[0-9]*)?|\.[0-9]+)([A-Z\u0400-\u04FF]+)')


class MessageParser:
	"""Extracts ``<amount><currency alias>`` from free chat text."""

	def __init__(self, allow_fractional: bool = True):
		self.allow_fractional = allow_fractional

	@staticmethod
	def normalize(raw_text: str) -> str:
		return _NOISE.sub('', raw_text.upper()).replace(',', '.')

	def parse(self, raw_text: str) -> ParsedMessage | None:
		match = _REQUEST.fullmatch(self.normalize(raw_text))
		if match is None:
			return None

		amount_text, alias = match.groups()
		if not self.allow_fractional and '.' in amount_text:
			return None

		try:
			amount = Decimal(amount_text)
		except InvalidOperation:
			return None
		if amount <= 0:
			return None

		return ParsedMessage(amount=amount, alias=alias)
