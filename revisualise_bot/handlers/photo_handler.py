# revisualise_bot/handlers/photo_handler.py
import asyncio
from collections import defaultdict
from typing import Dict, Optional, Tuple

import structlog
from aiogram import Bot, F, Router
from aiogram.fsm.context import FSMContext
from aiogram.types import CallbackQuery, Message

from revisualise_bot.data import message_provider
from revisualise_bot.data.constants import ImageRole
from revisualise_bot.dto.generation import SessionState
from revisualise_bot.keyboards.inline import IntakeSlotCallback, control_kb
from revisualise_bot.services.session_registry import SessionRegistry
from revisualise_bot.services.utils import guess_mime, to_data_uri
from revisualise_bot.states.user import INTAKE_STATE_BY_ROLE, Intake

router = Router(name="photo-handler")

logger = structlog.get_logger(__name__)

intake_locks: Dict[int, asyncio.Lock] = defaultdict(asyncio.Lock)
# An album can fill both slots; further photos in it are ignored.
MAX_ALBUM_PHOTOS = 2


async def _current_slot(state: FSMContext, session_state: SessionState) -> ImageRole:
    current = await state.get_state()
    if current == Intake.adult_photo.state:
        return ImageRole.ADULT
    if current == Intake.child_photo.state:
        return ImageRole.CHILD
    # No intake state (e.g. the bot restarted): fill whichever slot is empty.
    return ImageRole.CHILD if session_state.child_image is None else ImageRole.ADULT


def _next_slot(filled: ImageRole, session_state: SessionState) -> ImageRole:
    other = ImageRole.ADULT if filled is ImageRole.CHILD else ImageRole.CHILD
    return other if session_state.image_for(other) is None else filled


async def _download_image(msg: Message, bot: Bot) -> Optional[Tuple[bytes, str]]:
    """
    Downloads the photo (largest size) or image document using the
    get_file -> download_file sequence.
    """
    if msg.photo:
        target = max(msg.photo, key=lambda p: p.width * p.height)
    else:
        target = msg.document
    try:
        file_info = await bot.get_file(target.file_id)
        if not file_info.file_path:
            return None
        file_io = await bot.download_file(file_info.file_path)
        if not file_io:
            return None
        return file_io.read(), target.file_unique_id
    except Exception:
        logger.warning("Failed to download photo", file_id=target.file_id, exc_info=True)
        return None


@router.message(F.photo | F.document.mime_type.startswith("image/"))
async def receive_photo(
    msg: Message,
    state: FSMContext,
    bot: Bot,
    registry: SessionRegistry,
) -> None:
    """Reads an incoming image into memory and hands it to the session for the active slot."""
    # Album photos arrive as concurrent updates; one intake per chat at a time.
    async with intake_locks[msg.chat.id]:
        await _accept_photo(msg, state, bot, registry)


async def _accept_photo(
    msg: Message,
    state: FSMContext,
    bot: Bot,
    registry: SessionRegistry,
) -> None:
    session = registry.get(msg.chat.id)
    log = logger.bind(chat_id=msg.chat.id, media_group_id=msg.media_group_id)

    if msg.media_group_id:
        data = await state.get_data()
        seen = data.get("album_count", 0) if data.get("album_id") == msg.media_group_id else 0
        if seen >= MAX_ALBUM_PHOTOS:
            log.info("Ignoring extra album photo")
            return
        await state.update_data(album_id=msg.media_group_id, album_count=seen + 1)

    role = await _current_slot(state, session.state)
    log = log.bind(role=role.value)

    downloaded = await _download_image(msg, bot)
    if downloaded is None:
        await msg.answer("I couldn't download this photo. Please try sending it again.")
        return

    image_bytes, file_unique_id = downloaded
    try:
        mime_type = guess_mime(image_bytes)
    except ValueError:
        log.info("Rejected a file that is not a readable image", file_unique_id=file_unique_id)
        await msg.answer("That file doesn't look like a photo I can read. Please send a JPEG or PNG.")
        return

    await session.set_image(role, to_data_uri(image_bytes, mime_type))
    log.info("Photo accepted", file_unique_id=file_unique_id, size=len(image_bytes))

    next_role = _next_slot(role, session.state)
    await state.set_state(INTAKE_STATE_BY_ROLE[next_role])

    lines = [message_provider.get_photo_received(role)]
    if session.state.is_ready:
        lines.append(message_provider.get_control_message(True))
    else:
        lines.append(message_provider.get_photo_prompt(next_role))
    await msg.answer("\n\n".join(lines), reply_markup=control_kb(session.state))


@router.callback_query(IntakeSlotCallback.filter())
async def choose_slot(
    cb: CallbackQuery,
    callback_data: IntakeSlotCallback,
    state: FSMContext,
) -> None:
    """Points the next upload at the chosen role."""
    role = ImageRole(callback_data.role)
    await state.set_state(INTAKE_STATE_BY_ROLE[role])
    await cb.answer()
    await cb.message.answer(message_provider.get_photo_prompt(role))
