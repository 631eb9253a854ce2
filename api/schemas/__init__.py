from .responses import HealthResponse, WebhookAck
from .telegram import TelegramChat, TelegramMessage, TelegramUpdate, TelegramUser

__all__ = [
	'HealthResponse',
	'TelegramChat',
	'TelegramMessage',
	'TelegramUpdate',
	'TelegramUser',
	'WebhookAck',
]
