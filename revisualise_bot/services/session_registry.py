# File: revisualise_bot/services/session_registry.py
from collections.abc import Callable

import structlog

from revisualise_bot.services.generation_client import GenerateFunc
from revisualise_bot.services.generation_session import GenerationSession, StateListener

logger = structlog.get_logger(__name__)


class SessionRegistry:
    """In-memory map of chat id to its current GenerationSession. Nothing is persisted."""

    def __init__(
        self,
        generate: GenerateFunc,
        listener_factory: Callable[[int], StateListener] | None = None,
    ) -> None:
        self._generate = generate
        self._listener_factory = listener_factory
        self._sessions: dict[int, GenerationSession] = {}

    def get(self, chat_id: int) -> GenerationSession:
        """Returns the chat's session, starting one if none exists."""
        session = self._sessions.get(chat_id)
        if session is None:
            session = self.start(chat_id)
        return session

    def start(self, chat_id: int) -> GenerationSession:
        """Discards any previous session for the chat and starts a fresh one."""
        if self._sessions.pop(chat_id, None) is not None:
            logger.info("Discarding previous session", chat_id=chat_id)
        session = GenerationSession(self._generate, log=logger.bind(chat_id=chat_id))
        if self._listener_factory:
            session.subscribe(self._listener_factory(chat_id))
        self._sessions[chat_id] = session
        return session

    def __len__(self) -> int:
        return len(self._sessions)
