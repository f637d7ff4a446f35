# revisualise_bot/bot.py
import asyncio

import orjson
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties
from aiogram.fsm.storage.memory import MemoryStorage

from revisualise_bot import utils
from revisualise_bot.data.settings import settings
from revisualise_bot.handlers import (
    error,
    generation_handler,
    menu,
    photo_handler,
    utility,
)
from revisualise_bot.middlewares import StructLoggingMiddleware
from revisualise_bot.services.clients import get_ai_client_and_model
from revisualise_bot.services.generation_client import build_generate_func
from revisualise_bot.services.session_registry import SessionRegistry
from revisualise_bot.services.utils import http_client


def setup_handlers(dp: Dispatcher) -> None:
    dp.include_router(error.router)
    dp.include_router(menu.router)
    dp.include_router(photo_handler.router)
    dp.include_router(generation_handler.router)
    dp.include_router(utility.router)


def setup_middlewares(dp: Dispatcher) -> None:
    dp.update.outer_middleware(StructLoggingMiddleware(logger=dp["aiogram_logger"]))


def setup_logging(dp: Dispatcher) -> None:
    dp["aiogram_logger"] = utils.logging.setup_logger("revisualise_bot.aiogram").bind(type="aiogram")
    dp["business_logger"] = utils.logging.setup_logger("revisualise_bot.business").bind(type="business")


def setup_sessions(dp: Dispatcher, bot: Bot) -> None:
    ai_client, model = get_ai_client_and_model()
    generate = build_generate_func(
        ai_client,
        model,
        aspect_ratio=settings.generation.aspect_ratio,
        temperature=settings.generation.temperature,
    )
    dp["registry"] = SessionRegistry(
        generate,
        listener_factory=lambda chat_id: utils.SessionView(bot, chat_id),
    )
    dp["business_logger"].info(
        "Configured image generation",
        client=settings.generation.client,
        model=model,
    )


async def aiogram_on_startup(dispatcher: Dispatcher, bot: Bot) -> None:
    logger = dispatcher["aiogram_logger"]
    logger.debug("Configuring aiogram")
    await utils.bot_commands.setup_bot_profile(bot)
    logger.info("Configured aiogram")


async def aiogram_on_shutdown(dispatcher: Dispatcher) -> None:
    dispatcher["aiogram_logger"].debug("Stopping polling")
    await http_client.close()
    await dispatcher.storage.close()
    dispatcher["aiogram_logger"].info("Stopped polling")


def main() -> None:
    if settings.bot is None:
        raise RuntimeError("Missing bot configuration. Set env var BOT__TOKEN.")

    aiogram_session_logger = utils.logging.setup_logger("revisualise_bot.session").bind(type="aiogram_session")
    session = utils.smart_session.SmartAiogramAiohttpSession(
        json_loads=orjson.loads,
        logger=aiogram_session_logger,
    )
    bot = Bot(
        token=settings.bot.token.get_secret_value(),
        session=session,
        default=DefaultBotProperties(parse_mode="HTML"),
    )
    # Sessions live for the lifetime of the process only.
    dp = Dispatcher(storage=MemoryStorage())
    setup_logging(dp)
    setup_sessions(dp, bot)
    setup_handlers(dp)
    setup_middlewares(dp)
    dp.startup.register(aiogram_on_startup)
    dp.shutdown.register(aiogram_on_shutdown)
    asyncio.run(dp.start_polling(bot, allowed_updates=dp.resolve_used_update_types()))


if __name__ == "__main__":
    main()
