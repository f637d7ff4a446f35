# revisualise_bot/handlers/generation_handler.py
from contextlib import suppress

import structlog
from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import BufferedInputFile, CallbackQuery

from revisualise_bot.data import message_provider
from revisualise_bot.keyboards.inline import SessionActionCallback
from revisualise_bot.keyboards.inline.session_actions import (
    ACTION_CREATE,
    ACTION_DOWNLOAD,
    ACTION_RESET,
)
from revisualise_bot.services.session_registry import SessionRegistry

router = Router(name="generation-handler")

logger = structlog.get_logger(__name__)


@router.callback_query(SessionActionCallback.filter(F.action_type == ACTION_CREATE))
async def create_moment(cb: CallbackQuery, registry: SessionRegistry) -> None:
    """
    Submits the session. The session view renders progress and the outcome,
    so this handler only guards the button and removes it.
    """
    session = registry.get(cb.message.chat.id)
    if not session.can_submit:
        await cb.answer(message_provider.get_control_message(False))
        return

    await cb.answer()
    with suppress(TelegramBadRequest):
        await cb.message.edit_reply_markup(reply_markup=None)

    outcome = await session.submit()
    logger.info(
        "Generation finished",
        chat_id=cb.message.chat.id,
        ok=bool(outcome and outcome.ok),
    )


@router.callback_query(SessionActionCallback.filter(F.action_type == ACTION_DOWNLOAD))
async def download_moment(cb: CallbackQuery, registry: SessionRegistry) -> None:
    session = registry.get(cb.message.chat.id)
    image = session.download()
    if image is None:
        await cb.answer("This moment is no longer available. Create a new one!")
        return

    await cb.answer()
    await cb.message.answer_document(BufferedInputFile(image.data, image.filename))


@router.callback_query(SessionActionCallback.filter(F.action_type == ACTION_RESET))
async def create_another(cb: CallbackQuery, registry: SessionRegistry) -> None:
    session = registry.get(cb.message.chat.id)
    if not await session.reset():
        await cb.answer("Hold on, your moment is still being created ⏳")
        return
    await cb.answer()
    with suppress(TelegramBadRequest):
        await cb.message.edit_reply_markup(reply_markup=None)
