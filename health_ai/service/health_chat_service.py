import datetime as dt
from collections import defaultdict
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from health_ai.health.fetcher import HealthDataFetcher
from health_ai.health.metric_store import MetricStore
from health_ai.health.summary import latest_status_line
from health_ai.service.llm_service import LLMService

FALLBACK_RESPONSE = "Sorry, I couldn't generate a response."


@dataclass(frozen=True)
class ChatMessage:
    is_user: bool
    text: str

    def as_transcript_line(self) -> str:
        return f"User: {self.text}" if self.is_user else f"Assistant: {self.text}"


class HealthChatService:
    """
    Keeps per-user conversations about the user's health data.

    The metric store is shared with the rest of the application; the service
    refreshes it through the fetcher when a conversation starts and embeds the
    current status line in every prompt.
    """

    def __init__(self, store: MetricStore, fetcher: HealthDataFetcher, llm_service: LLMService) -> None:
        self.store = store
        self.fetcher = fetcher
        self.llm_service = llm_service
        self._conversations: dict[int, list[ChatMessage]] = defaultdict(list)

    def history(self, user_id: int) -> list[ChatMessage]:
        return list(self._conversations.get(user_id, []))

    def reset(self, user_id: int) -> None:
        logger.info(f"Resetting conversation for user {user_id}")
        self._conversations.pop(user_id, None)

    def health_context(self) -> str:
        return f"User's Health Summary:\n{latest_status_line(self.store)}"

    async def start_conversation(self, user_id: int, now: Optional[dt.datetime] = None) -> str:
        """
        Refresh metrics and open the conversation with the current status line.

        The status line is only added to the history when the conversation is
        empty; otherwise the existing conversation is kept.

        Returns:
            The current status line.
        """
        await self.fetcher.fetch_all_data(self.store, now)
        status = latest_status_line(self.store)

        conversation = self._conversations[user_id]
        if not conversation:
            conversation.append(ChatMessage(is_user=False, text=status))
        return status

    def build_prompt(self, user_id: int) -> str:
        transcript = "\n".join(message.as_transcript_line() for message in self._conversations.get(user_id, []))
        return f"{self.health_context()}\n\n{transcript}\nAssistant:"

    async def send(self, user_id: int, text: str) -> Optional[str]:
        """
        Add a user message and get the assistant's reply.

        Args:
            user_id: The user sending the message.
            text: The message text. Blank messages are ignored.

        Returns:
            The assistant reply, or None when the message was blank.
        """
        trimmed = text.strip()
        if not trimmed:
            return None

        if self.store.is_empty():
            # Nothing fetched yet, e.g. a message sent right after a restart
            await self.fetcher.fetch_all_data(self.store)

        conversation = self._conversations[user_id]
        conversation.append(ChatMessage(is_user=True, text=trimmed))

        prompt = self.build_prompt(user_id)
        logger.debug(f"Running health assistant for user {user_id} ({len(conversation)} messages)")
        response = await self.llm_service.fetch_insight(prompt) or FALLBACK_RESPONSE

        conversation.append(ChatMessage(is_user=False, text=response))
        return response
