from aiogram.filters.callback_data import CallbackData


class IntakeSlotCallback(CallbackData, prefix="intake_slot"):
    """Callback to choose which photo the next upload replaces."""
    role: str


class SessionActionCallback(CallbackData, prefix="session_action"):
    """Callback for actions on the current session (create, download, reset)."""
    action_type: str
