from . import bot_commands, logging, smart_session
from .session_view import SessionView
from .status_manager import StatusMessageManager

__all__ = [
    "SessionView",
    "StatusMessageManager",
    "bot_commands",
    "logging",
    "smart_session",
]
