from abc import ABC, abstractmethod
from typing import Any

from loguru import logger
from telegram import Update
from telegram.ext import CallbackContext


class PrivateHandler(ABC):
    """Base handler that only serves the owner of the health data."""

    def __init__(self, owner_user_id: int) -> None:
        self.owner_user_id = owner_user_id

    async def handle(self, update: Update, context: CallbackContext) -> Any:
        logger.debug(
            f"Received message {update.message.text} from {update.effective_user.name}(id: {update.effective_user.id})"
        )
        if update.effective_user.id != self.owner_user_id:
            await update.message.reply_text("Sorry, this bot only talks about its owner's health data.")
            return
        try:
            return await self._handle(update, context)
        except Exception as e:
            await update.message.reply_text(f"Exception has occurred!\n{e}")
            logger.exception(e)

    @abstractmethod
    async def _handle(self, update: Update, context: CallbackContext) -> Any:
        raise NotImplementedError
