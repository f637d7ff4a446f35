# revisualise_bot/utils/smart_session.py
import asyncio
import time
from typing import Any

import structlog.typing
from aiogram import Bot
from aiogram.client.session.aiohttp import AiohttpSession
from aiogram.exceptions import (
    RestartingTelegram,
    TelegramBadRequest,
    TelegramRetryAfter,
    TelegramServerError,
)
from aiogram.methods.base import TelegramMethod, TelegramType

_BENIGN_BAD_REQUESTS = ("message to delete not found", "message is not modified")


class SmartAiogramAiohttpSession(AiohttpSession):
    """
    Bot API session that logs every call and waits out Telegram flood limits
    and restarts before giving the call another go.
    """
    MAX_ATTEMPTS: int = 5

    def __init__(
        self,
        logger: structlog.typing.FilteringBoundLogger,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self._logger = logger

    async def _logged_request(
        self,
        bot: Bot,
        method: TelegramMethod[TelegramType],
        timeout: int | None = None,
    ) -> TelegramType:
        req_logger = self._logger.bind(
            bot=bot.token.split(":")[0],  # Log only bot ID for security
            method=method.__api_method__,
            timeout=timeout,
        )
        st = time.monotonic()
        req_logger.debug("Making request to API")
        try:
            res = await super().make_request(bot, method, timeout)
        except TelegramBadRequest as e:
            if any(s in str(e).lower() for s in _BENIGN_BAD_REQUESTS):
                req_logger.warning(
                    "API warning (non-critical)",
                    error=str(e),
                    time_spent_ms=(time.monotonic() - st) * 1000,
                )
            else:
                req_logger.exception(
                    "API error: TelegramBadRequest",
                    time_spent_ms=(time.monotonic() - st) * 1000,
                )
            raise
        req_logger.debug("API response", time_spent_ms=(time.monotonic() - st) * 1000)
        return res

    async def make_request(
        self,
        bot: Bot,
        method: TelegramMethod[TelegramType],
        timeout: int | None = None,
    ) -> TelegramType:
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._logged_request(bot, method, timeout)
            except TelegramRetryAfter as e:
                if attempt >= self.MAX_ATTEMPTS:
                    raise
                await asyncio.sleep(e.retry_after)
            except (RestartingTelegram, TelegramServerError):
                if attempt >= self.MAX_ATTEMPTS:
                    raise
                await asyncio.sleep(2**attempt)
