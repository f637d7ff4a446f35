# revisualise_bot/utils/bot_commands.py
from aiogram import Bot
from aiogram.types import BotCommand, BotCommandScopeDefault

from revisualise_bot.data import texts


async def setup_bot_profile(bot: Bot) -> None:
    """
    Publishes the command menu and the bot descriptions for every locale in
    the texts package. Telegram falls back to the default-locale entry.
    """
    for lang_code, lang_texts in texts.ALL_TEXTS.items():
        language_code = None if lang_code == texts.DEFAULT_LOCALE else lang_code
        await bot.set_my_commands(
            [BotCommand(command=c.command, description=c.description) for c in lang_texts.commands],
            scope=BotCommandScopeDefault(),
            language_code=language_code,
        )
        await bot.set_my_description(
            description=lang_texts.bot_info.description,
            language_code=language_code,
        )
        await bot.set_my_short_description(
            short_description=lang_texts.bot_info.short_description,
            language_code=language_code,
        )
