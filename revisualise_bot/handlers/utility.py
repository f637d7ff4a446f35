# revisualise_bot/handlers/utility.py
from aiogram import Router, F
from aiogram.filters import Command
from aiogram.types import Message

from revisualise_bot.data.settings import settings

router = Router(name="utility-handlers")


@router.message(Command("help"))
async def help_cmd(msg: Message) -> None:
    support_email = settings.bot.support_email if settings.bot else "support@example.com"
    await msg.answer(
        "Send a photo of you as a child and one of you as an adult, then tap "
        "<b>✨ Create the Moment</b>. Use the buttons to swap a photo, or /cancel to start over.\n\n"
        f"Questions? Contact us at: {support_email}"
    )


@router.message(F.text | F.sticker | F.video | F.animation)
async def handle_unexpected_input(msg: Message) -> None:
    """
    Catches any input that is not a photo and gently guides the user back.
    """
    await msg.answer(
        "I can only work with photos. Send a picture, or /cancel to start over."
    )
