# revisualise_bot/keyboards/inline/session_actions.py
from aiogram.types import InlineKeyboardMarkup, InlineKeyboardButton

from revisualise_bot.data.constants import ImageRole, Phase
from revisualise_bot.dto.generation import SessionState
from .callbacks import IntakeSlotCallback, SessionActionCallback

ACTION_CREATE = "create"
ACTION_DOWNLOAD = "download"
ACTION_RESET = "reset"


def control_kb(state: SessionState) -> InlineKeyboardMarkup:
    """
    Creates the photo control panel for the intake phases.

    The create button is only offered when both photos are present and no
    generation is running.

    Args:
        state: The current session state.

    Returns:
        An inline keyboard with photo and create actions.
    """
    child_text = "👶 Change child photo" if state.child_image else "👶 Add child photo"
    adult_text = "🧑 Change adult photo" if state.adult_image else "🧑 Add adult photo"
    buttons = [
        [
            InlineKeyboardButton(
                text=child_text,
                callback_data=IntakeSlotCallback(role=ImageRole.CHILD.value).pack(),
            ),
            InlineKeyboardButton(
                text=adult_text,
                callback_data=IntakeSlotCallback(role=ImageRole.ADULT.value).pack(),
            ),
        ]
    ]

    if state.is_ready and state.phase in (Phase.IDLE, Phase.ERROR):
        buttons.append(
            [
                InlineKeyboardButton(
                    text="✨ Create the Moment",
                    callback_data=SessionActionCallback(action_type=ACTION_CREATE).pack(),
                )
            ]
        )

    return InlineKeyboardMarkup(inline_keyboard=buttons)


def result_kb() -> InlineKeyboardMarkup:
    return InlineKeyboardMarkup(
        inline_keyboard=[
            [
                InlineKeyboardButton(
                    text="⬇️ Download Memory",
                    callback_data=SessionActionCallback(action_type=ACTION_DOWNLOAD).pack(),
                ),
                InlineKeyboardButton(
                    text="🔄 Create Another",
                    callback_data=SessionActionCallback(action_type=ACTION_RESET).pack(),
                ),
            ]
        ]
    )
