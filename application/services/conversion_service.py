import logging

from application.services.alias_resolver import AliasResolver
from application.services.message_parser import MessageParser
from application.services.rate_cache import RateCache
from application.services.reply_formatter import ReplyFormatter
from domain.models.currency import ConversionRequest

logger = logging.getLogger(__name__)


class ConversionService:
	def __init__(
		self,
		parser: MessageParser,
		resolver: AliasResolver,
		rate_cache: RateCache,
		formatter: ReplyFormatter,
	):
		self.parser = parser
		self.resolver = resolver
		self.rate_cache = rate_cache
		self.formatter = formatter

	def to_request(self, text: str, requester: int | None = None) -> ConversionRequest | None:
		parsed = self.parser.parse(text)
		if parsed is None:
			return None

		base = self.resolver.resolve(parsed.alias)
		if base is None:
			return None

		return ConversionRequest(amount=parsed.amount, base=base, requester=requester)

	async def handle_text(self, text: str, requester: int | None = None) -> str | None:
		"""Return the reply for a chat message, or None when nothing should be sent."""
		request = self.to_request(text, requester)
		if request is None:
			return None

		logger.info(f'Converting {request.amount} {request.base.value} for {requester}')
		rates = await self.rate_cache.get_rates(request.base, request.requester)
		return self.formatter.format(request.amount, rates)
