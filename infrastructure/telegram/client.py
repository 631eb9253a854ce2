import logging

import httpx

from domain.exceptions.currency import TransportError

logger = logging.getLogger(__name__)


class TelegramClient:
	BASE_URL = 'https://api.telegram.org'

	def __init__(
		self,
		token: str,
		client: httpx.AsyncClient | None = None,
		base_url: str | None = None,
		timeout: float = 10,
	):
		self.token = token
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self._client = client or httpx.AsyncClient(timeout=timeout)

	async def _call(self, method: str, payload: dict) -> dict:
		url = f'{self.base_url}/bot{self.token}/{method}'

		try:
			response = await self._client.post(url, json=payload)
			response.raise_for_status()
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise TransportError(
				f'Telegram {method} HTTP error {e.response.status_code}: {e.response.text[:200]}'
			) from e
		except httpx.RequestError as e:
			raise TransportError(f'Telegram {method} request failed: {e.__class__.__name__}') from e
		except ValueError as e:
			raise TransportError(f'Telegram {method} response parsing error: {str(e)}') from e

		if not data.get('ok', False):
			raise TransportError(f"Telegram {method} error: {data.get('description', 'Unknown error')}")

		return data.get('result', {})

	async def send_message(self, chat_id: int, text: str) -> dict:
		result = await self._call('sendMessage', {'chat_id': chat_id, 'text': text})
		logger.info(f'Replied to chat {chat_id}')
		return result

	async def close(self) -> None:
		await self._client.aclose()
