# revisualise_bot/utils/session_view.py
import structlog
from aiogram import Bot
from aiogram.types import BufferedInputFile

from revisualise_bot.data import message_provider
from revisualise_bot.data.constants import DOWNLOAD_FILENAME, Phase
from revisualise_bot.dto.generation import SessionState
from revisualise_bot.keyboards.inline import control_kb, result_kb
from revisualise_bot.services.utils import parse_data_uri
from revisualise_bot.utils.status_manager import StatusMessageManager

logger = structlog.get_logger(__name__)


class SessionView:
    """
    Renders phase changes of one chat's session into Telegram messages.

    Subscribed to the session as a listener; it only reads the state it is given.
    """

    def __init__(self, bot: Bot, chat_id: int) -> None:
        self.bot = bot
        self.chat_id = chat_id
        self._last_phase = Phase.IDLE
        self._status: StatusMessageManager | None = None
        self.log = logger.bind(chat_id=chat_id)

    async def __call__(self, state: SessionState) -> None:
        previous, self._last_phase = self._last_phase, state.phase
        if state.phase is previous:
            return

        self.log.debug("Rendering phase", phase=state.phase.value, previous=previous.value)
        if state.phase is Phase.GENERATING:
            await self._show_progress()
        elif state.phase is Phase.SUCCESS:
            await self._clear_progress()
            await self._show_result(state)
        elif state.phase is Phase.ERROR:
            await self._clear_progress()
            await self.bot.send_message(
                self.chat_id,
                message_provider.get_error_message(state.error_message or ""),
                reply_markup=control_kb(state),
            )
        elif state.phase is Phase.IDLE:
            await self.bot.send_message(
                self.chat_id,
                message_provider.get_control_message(state.is_ready),
                reply_markup=control_kb(state),
            )

    async def _show_progress(self) -> None:
        self._status = await StatusMessageManager.send(
            self.bot,
            self.chat_id,
            f"{message_provider.get_generating_message()}\n\n"
            f"{message_provider.get_generating_details_message()}",
        )

    async def _clear_progress(self) -> None:
        if self._status:
            await self._status.delete()
            self._status = None

    async def _show_result(self, state: SessionState) -> None:
        image_bytes, _ = parse_data_uri(state.output_image or "")
        await self.bot.send_photo(
            self.chat_id,
            photo=BufferedInputFile(image_bytes, DOWNLOAD_FILENAME),
            caption=message_provider.get_success_caption(),
            reply_markup=result_kb(),
        )
