import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog
from aiogram import BaseMiddleware
from aiogram.types import TelegramObject, Update


class StructLoggingMiddleware(BaseMiddleware):
    """Logs every incoming update with its handling time."""

    def __init__(self, logger: structlog.typing.FilteringBoundLogger) -> None:
        self.logger = logger

    async def __call__(
        self,
        handler: Callable[[TelegramObject, dict[str, Any]], Awaitable[Any]],
        event: TelegramObject,
        data: dict[str, Any],
    ) -> Any:
        if not isinstance(event, Update):
            return await handler(event, data)

        user = data.get("event_from_user")
        log = self.logger.bind(
            update_id=event.update_id,
            event_type=event.event_type,
            user_id=user.id if user else None,
        )
        st = time.monotonic()
        log.debug("Received update")
        result = await handler(event, data)
        log.info("Handled update", time_spent_ms=(time.monotonic() - st) * 1000)
        return result
