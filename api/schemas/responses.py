from pydantic import BaseModel, Field


class WebhookAck(BaseModel):
	ok: bool = Field(default=True, description='Update was accepted')
	replied: bool = Field(default=False, description='A conversion reply was sent')


class HealthResponse(BaseModel):
	status: str = Field(default='ok')
