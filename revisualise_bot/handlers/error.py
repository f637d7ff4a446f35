# revisualise_bot/handlers/error.py
import structlog
from aiogram import Router
from aiogram.exceptions import TelegramBadRequest
from aiogram.types import Update, ErrorEvent
from contextlib import suppress

logger = structlog.get_logger(__name__)

router = Router(name="error-handler")


@router.errors()
async def global_error_handler(update: ErrorEvent) -> bool:
    """Handle all uncaught exceptions."""
    exception = update.exception
    actual_update: Update = update.update

    # Acknowledge the callback to prevent timeout errors for the user
    if actual_update.callback_query:
        with suppress(TelegramBadRequest):
            await actual_update.callback_query.answer()

    if isinstance(exception, TelegramBadRequest):
        if "message to delete not found" in str(exception).lower():
            logger.warning("Tried to delete a message that was already deleted.")
            return True
        if "message is not modified" in str(exception).lower():
            logger.warning("Tried to edit a message with the same content.")
            return True

    logger.error(
        "An unhandled exception occurred",
        exc_info=exception,
        update_id=actual_update.update_id,
    )

    target_message = (
        actual_update.callback_query.message if actual_update.callback_query else actual_update.message
    )
    if target_message:
        with suppress(TelegramBadRequest):
            await target_message.answer(
                "😔 Oops! Something went wrong on our end. Please try again in a few moments."
            )

    return True
