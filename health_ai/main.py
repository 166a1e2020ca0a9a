from __future__ import annotations

import asyncio
from pathlib import Path

from loguru import logger
from telegram import BotCommand, BotCommandScopeAllPrivateChats, BotCommandScopeDefault, Update
from telegram.ext import Application, ApplicationBuilder

from health_ai.config import BotSettings
from health_ai.handlers.commands.chat_commands import get_reset_command, get_start_command, get_status_command
from health_ai.handlers.commands.trends_command import get_trends_command
from health_ai.handlers.messages import get_chat_message_handler
from health_ai.service_factory import ServiceFactory


def setup_logger(out_dir: Path) -> None:
    log_dir = out_dir / "log"
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.add(log_dir / "debug.log", rotation="100 MB", retention="7 days", level="DEBUG")
    logger.add(log_dir / "error.log", rotation="100 MB", retention="7 days", level="ERROR")
    logger.info("logger initialised")


def _build_commands() -> list[BotCommand]:
    return [
        BotCommand("start", "Start a chat with your latest health status"),
        BotCommand("status", "Show your latest health numbers"),
        BotCommand("trends", "Show a metric over a week or month"),
        BotCommand("reset", "Clear the conversation"),
    ]


async def _post_init(application: Application) -> None:
    commands = _build_commands()
    await asyncio.gather(
        application.bot.set_my_commands(commands, scope=BotCommandScopeAllPrivateChats()),
        application.bot.set_my_commands(commands, scope=BotCommandScopeDefault()),
    )
    logger.info("Bot commands registered.")


def _build_app(bot_settings: BotSettings) -> Application:
    application = (
        ApplicationBuilder()
        .token(bot_settings.telegram_bot_api_key)
        .concurrent_updates(True)
        .read_timeout(bot_settings.read_timeout_s)
        .write_timeout(bot_settings.write_timeout_s)
        .post_init(_post_init)
        .build()
    )
    return application


def _setup_handlers(app: Application, bot_settings: BotSettings, service_factory: ServiceFactory) -> None:
    owner = bot_settings.my_telegram_user_id
    chat_service = service_factory.health_chat_service

    app.add_handler(get_start_command(owner, chat_service))
    app.add_handler(get_status_command(owner, chat_service))
    app.add_handler(get_reset_command(owner, chat_service))
    app.add_handler(
        get_trends_command(
            owner,
            service_factory.metric_store,
            service_factory.health_data_fetcher,
            bot_settings.default_range_days,
        )
    )
    app.add_handler(get_chat_message_handler(owner, chat_service))


def build_configured_application(bot_settings: BotSettings | None = None) -> Application:
    bot_settings = bot_settings or BotSettings()
    bot_settings.out_dir.mkdir(parents=True, exist_ok=True)
    setup_logger(bot_settings.out_dir)

    service_factory = ServiceFactory(bot_settings)
    logger.info(f"Using health data source: {type(service_factory.health_data_source).__name__}")

    application = _build_app(bot_settings)
    _setup_handlers(application, bot_settings, service_factory)
    return application


def main() -> None:  # pragma: no cover
    application = build_configured_application()
    logger.info("Starting polling …")
    application.run_polling(allowed_updates=Update.ALL_TYPES)


if __name__ == "__main__":
    main()
