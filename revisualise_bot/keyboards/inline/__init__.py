# revisualise_bot/keyboards/inline/__init__.py
from .callbacks import IntakeSlotCallback, SessionActionCallback
from .session_actions import control_kb, result_kb

__all__ = [
    "IntakeSlotCallback",
    "SessionActionCallback",
    "control_kb",
    "result_kb",
]
