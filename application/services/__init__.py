from .alias_resolver import AliasResolver
from .conversion_service import ConversionService
from .message_parser import MessageParser
from .rate_cache import RateCache
from .rate_service import RateService
from .reply_formatter import ReplyFormatter

__all__ = [
	'AliasResolver',
	'ConversionService',
	'MessageParser',
	'RateCache',
	'RateService',
	'ReplyFormatter',
]
