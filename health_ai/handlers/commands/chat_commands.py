from telegram import Update
from telegram.ext import CallbackContext, CommandHandler

from health_ai.handlers.base.private_handler import PrivateHandler
from health_ai.health.summary import latest_status_line
from health_ai.service.health_chat_service import HealthChatService


class StartHandler(PrivateHandler):
    """Opens the conversation with the latest health status."""

    def __init__(self, owner_user_id: int, chat_service: HealthChatService) -> None:
        super().__init__(owner_user_id)
        self.chat_service = chat_service

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        status = await self.chat_service.start_conversation(update.effective_user.id)
        await update.message.reply_text(status)


class StatusHandler(PrivateHandler):
    def __init__(self, owner_user_id: int, chat_service: HealthChatService) -> None:
        super().__init__(owner_user_id)
        self.chat_service = chat_service

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        store = await self.chat_service.fetcher.fetch_all_data(self.chat_service.store)
        await update.message.reply_text(latest_status_line(store))


class ResetHandler(PrivateHandler):
    def __init__(self, owner_user_id: int, chat_service: HealthChatService) -> None:
        super().__init__(owner_user_id)
        self.chat_service = chat_service

    async def _handle(self, update: Update, context: CallbackContext) -> None:
        self.chat_service.reset(update.effective_user.id)
        await update.message.reply_text("Conversation cleared. Send /start to begin again.")


def get_start_command(owner_user_id: int, chat_service: HealthChatService) -> CommandHandler:
    return CommandHandler("start", StartHandler(owner_user_id, chat_service).handle)


def get_status_command(owner_user_id: int, chat_service: HealthChatService) -> CommandHandler:
    return CommandHandler("status", StatusHandler(owner_user_id, chat_service).handle)


def get_reset_command(owner_user_id: int, chat_service: HealthChatService) -> CommandHandler:
    return CommandHandler("reset", ResetHandler(owner_user_id, chat_service).handle)
