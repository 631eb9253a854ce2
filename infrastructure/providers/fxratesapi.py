import logging
from collections.abc import Iterable
from decimal import Decimal, InvalidOperation

import httpx

from domain.exceptions.currency import ProviderError
from domain.models.currency import CanonicalCurrency, RateQuote

logger = logging.getLogger(__name__)


class FxRatesAPIProvider:
	BASE_URL = 'https://api.fxratesapi.com'

	def __init__(
		self,
		api_key: str,
		client: httpx.AsyncClient | None = None,
		base_url: str | None = None,
		places: int = 3,
		timeout: float = 10,
	):
		self.api_key = api_key
		self.base_url = (base_url or self.BASE_URL).rstrip('/')
		self.places = places
		self._client = client or httpx.AsyncClient(timeout=timeout)

	@property
	def name(self) -> str:
		return 'fxratesapi'

	async def _request(self, endpoint: str, params: dict) -> dict:
		url = f'{self.base_url}/{endpoint}'

		try:
			response = await self._client.get(
				url,
				params=params,
				headers={'Authorization': f'Bearer {self.api_key}'},
			)
			response.raise_for_status()
			data = response.json()
		except httpx.HTTPStatusError as e:
			raise ProviderError(
				f'fxratesapi HTTP error {e.response.status_code}: {e.response.text[:200]}',
				status_code=e.response.status_code,
			) from e
		except httpx.RequestError as e:
			raise ProviderError(f'fxratesapi request failed: {e.__class__.__name__}') from e
		except ValueError as e:
			raise ProviderError(f'fxratesapi response parsing error: {str(e)}') from e

		if not isinstance(data, dict):
			raise ProviderError('fxratesapi response parsing error: body is not an object')
		if data.get('success') is False:
			message = data.get('description') or data.get('message') or 'Unknown error'
			raise ProviderError(f'fxratesapi API error: {message}', status_code=response.status_code)

		return data

	async def fetch_rates(
		self, base: CanonicalCurrency, symbols: Iterable[CanonicalCurrency]
	) -> RateQuote:
		requested = [symbol.value for symbol in symbols]
		data = await self._request(
			'latest',
			{'base': base.value, 'currencies': ','.join(requested), 'places': self.places},
		)

		raw_rates = data.get('rates')
		if not isinstance(raw_rates, dict):
			raise ProviderError('fxratesapi response has no rates')

		if data.get('base', base.value) != base.value:
			raise ProviderError(f"fxratesapi answered for base {data.get('base')}, asked {base.value}")

		missing = [code for code in requested if code not in raw_rates]
		if missing:
			raise ProviderError(f"Missing rate for {', '.join(missing)}")

		rates: dict[str, Decimal] = {}
		# Keep the provider's ordering; drop anything we did not ask for
		for code, value in raw_rates.items():
			if code not in requested:
				continue
			rates[code] = self._to_rate(code, value)

		logger.debug(f'fxratesapi returned {len(rates)} rates for {base.value}')
		return RateQuote(base=base, rates=rates)

	@staticmethod
	def _to_rate(code: str, value) -> Decimal:
		if isinstance(value, bool) or not isinstance(value, (int, float, str)):
			raise ProviderError(f'Invalid rate for {code}: {value!r}')
		try:
			rate = Decimal(str(value))
		except InvalidOperation as e:
			raise ProviderError(f'Invalid rate for {code}: {value!r}') from e
		if not rate.is_finite() or rate <= 0:
			raise ProviderError(f'Invalid rate for {code}: {value!r}')
		return rate

	async def close(self) -> None:
		await self._client.aclose()
