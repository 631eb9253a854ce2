from pydantic import BaseModel, ConfigDict, Field


class TelegramUser(BaseModel):
	model_config = ConfigDict(extra='ignore')

	id: int
	is_bot: bool = False
	first_name: str | None = None
	username: str | None = None


class TelegramChat(BaseModel):
	model_config = ConfigDict(extra='ignore')

	id: int
	type: str | None = None


class TelegramMessage(BaseModel):
	model_config = ConfigDict(extra='ignore', populate_by_name=True)

	message_id: int
	chat: TelegramChat
	from_user: TelegramUser | None = Field(default=None, alias='from')
	text: str | None = None


class TelegramUpdate(BaseModel):
	model_config = ConfigDict(extra='ignore')

	update_id: int
	message: TelegramMessage | None = None
	channel_post: TelegramMessage | None = None

	@property
	def text_message(self) -> TelegramMessage | None:
		for candidate in (self.message, self.channel_post):
			if candidate is not None and candidate.text:
				return candidate
		return None
