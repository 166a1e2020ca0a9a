from typing import Any

from telegram import Update
from telegram.constants import ChatAction
from telegram.ext import CallbackContext, MessageHandler, filters

from health_ai.handlers.base.private_handler import PrivateHandler
from health_ai.service.health_chat_service import HealthChatService


class ChatMessageHandler(PrivateHandler):
    def __init__(self, owner_user_id: int, chat_service: HealthChatService):
        super().__init__(owner_user_id)
        self.chat_service = chat_service

    async def _handle(self, update: Update, context: CallbackContext) -> Any:
        user_id = update.effective_user.id

        # Typing indicator while the LLM replies
        await update.effective_chat.send_action(ChatAction.TYPING)
        response = await self.chat_service.send(user_id=user_id, text=update.message.text or "")
        if response is None:
            return

        await update.message.reply_text(response)


def get_chat_message_handler(owner_user_id: int, chat_service: HealthChatService) -> MessageHandler:
    return MessageHandler(filters.TEXT & ~filters.COMMAND, ChatMessageHandler(owner_user_id, chat_service).handle)
