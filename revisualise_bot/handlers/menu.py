# revisualise_bot/handlers/menu.py
from aiogram import Router
from aiogram.filters import Command, StateFilter
from aiogram.fsm.context import FSMContext
from aiogram.types import Message

from revisualise_bot.data import message_provider
from revisualise_bot.services.session_registry import SessionRegistry
from revisualise_bot.states.user import Intake

router = Router(name="menu-handlers")


async def send_welcome_message(
    msg: Message,
    state: FSMContext,
    registry: SessionRegistry,
    is_restart: bool = False,
) -> None:
    """Starts a fresh session for the chat and asks for the child photo."""
    registry.start(msg.chat.id)

    await state.clear()
    await state.set_state(Intake.child_photo)

    if is_restart:
        text = message_provider.get_restart_message()
    else:
        text = message_provider.get_start_message()
    await msg.answer(text)


@router.message(Command("start", "menu"), StateFilter("*"))
async def start_flow(msg: Message, state: FSMContext, registry: SessionRegistry) -> None:
    """Handles /start and /menu."""
    await send_welcome_message(msg, state, registry)


@router.message(Command("cancel"), StateFilter("*"))
async def cancel_flow(msg: Message, state: FSMContext, registry: SessionRegistry) -> None:
    """Handles /cancel command."""
    await send_welcome_message(msg, state, registry, is_restart=True)
