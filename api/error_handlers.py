import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from domain.exceptions.currency import ProviderError, StorageError, TransportError

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(ProviderError)
	async def provider_error_handler(request: Request, exc: ProviderError):
		logger.error(f'Provider error (upstream status {exc.status_code}): {exc}')
		return JSONResponse(
			status_code=503, content={'detail': 'Exchange rate service unavailable'}
		)

	@app.exception_handler(StorageError)
	async def storage_error_handler(request: Request, exc: StorageError):
		logger.error(f'Rate store error: {exc}')
		return JSONResponse(status_code=503, content={'detail': 'Rate store unavailable'})

	@app.exception_handler(TransportError)
	async def transport_error_handler(request: Request, exc: TransportError):
		logger.error(f'Telegram error: {exc}')
		return JSONResponse(status_code=503, content={'detail': 'Reply could not be delivered'})

	@app.exception_handler(Exception)
	async def global_exception_handler(request: Request, exc: Exception):
		logger.error(f'Unhandled exception: {exc}', exc_info=True)
		return JSONResponse(status_code=500, content={'detail': 'Internal server error'})
