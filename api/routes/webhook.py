import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from pydantic import ValidationError

from api.dependencies import get_conversion_service, get_telegram_client, verify_secret
from api.schemas import HealthResponse, TelegramUpdate, WebhookAck
from application.services import ConversionService
from infrastructure.telegram.client import TelegramClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=['bot'])


@router.post(
	'/webhook',
	response_model=WebhookAck,
	status_code=status.HTTP_200_OK,
	summary='Receive a Telegram update',
	dependencies=[Depends(verify_secret)],
)
async def receive_update(
	request: Request,
	service: Annotated[ConversionService, Depends(get_conversion_service)],
	telegram: Annotated[TelegramClient, Depends(get_telegram_client)],
) -> WebhookAck:
	try:
		update = TelegramUpdate.model_validate(await request.json())
	except (ValueError, ValidationError) as e:
		logger.warning(f'Malformed update: {e}')
		raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail='Malformed update') from e

	message = update.text_message
	if message is None:
		return WebhookAck()

	requester = message.from_user.id if message.from_user else None
	reply = await service.handle_text(message.text, requester)
	if not reply:
		return WebhookAck()

	await telegram.send_message(message.chat.id, reply)
	return WebhookAck(replied=True)


@router.get('/health', response_model=HealthResponse, summary='Liveness probe')
async def health() -> HealthResponse:
	return HealthResponse()
