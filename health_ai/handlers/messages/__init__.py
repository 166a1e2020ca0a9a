from health_ai.handlers.messages.chat_message_handler import get_chat_message_handler

__all__ = ["get_chat_message_handler"]
