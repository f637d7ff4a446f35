from types import SimpleNamespace

import pytest

from revisualise_bot.data.constants import GENERIC_ERROR_MESSAGE, GenerationErrorKind
from revisualise_bot.dto.generation import GenerationError, GenerationSuccess
from revisualise_bot.keyboards.inline.session_actions import ACTION_CREATE, ACTION_DOWNLOAD, ACTION_RESET
from revisualise_bot.services.generation_session import GenerationSession
from revisualise_bot.services.utils import to_data_uri
from revisualise_bot.utils.session_view import SessionView
from revisualise_bot.utils.status_manager import StatusMessageManager
from tests.helpers import make_png


class FakeBot:
    def __init__(self) -> None:
        self.sent: list[dict] = []
        self.deleted: list[int] = []
        self.photos: list[dict] = []

    async def send_message(self, chat_id, text, reply_markup=None, **kwargs):
        self.sent.append({"chat_id": chat_id, "text": text, "reply_markup": reply_markup})
        return SimpleNamespace(message_id=len(self.sent))

    async def delete_message(self, chat_id, message_id):
        self.deleted.append(message_id)

    async def send_photo(self, chat_id, photo, caption=None, reply_markup=None, **kwargs):
        self.photos.append({"photo": photo, "caption": caption, "reply_markup": reply_markup})


def callback_actions(markup) -> list[str]:
    return [button.callback_data for row in markup.inline_keyboard for button in row]


@pytest.fixture(autouse=True)
def no_status_delay(monkeypatch):
    async def _no_wait(self):
        return None

    monkeypatch.setattr(StatusMessageManager, "_wait_if_needed", _no_wait)


async def run_session(outcome) -> FakeBot:
    bot = FakeBot()

    async def _generate(child_image: str, adult_image: str):
        return outcome

    session = GenerationSession(_generate)
    session.subscribe(SessionView(bot, chat_id=7))
    await session.set_child_image("C")
    await session.set_adult_image("A")
    await session.submit()
    return bot


async def test_success_replaces_progress_with_result_photo():
    image = make_png("green")

    bot = await run_session(GenerationSuccess(image_ref=to_data_uri(image, "image/png")))

    assert "Revising Time" in bot.sent[0]["text"]
    assert bot.deleted == [1]
    assert len(bot.photos) == 1
    assert "Your Journey Revisualised" in bot.photos[0]["caption"]
    actions = callback_actions(bot.photos[0]["reply_markup"])
    assert any(ACTION_DOWNLOAD in a for a in actions)
    assert any(ACTION_RESET in a for a in actions)


async def test_error_shows_escaped_message_and_create_button():
    bot = await run_session(
        GenerationError(kind=GenerationErrorKind.SERVICE_REJECTION, message="Image size must be < 20MB & > 1px")
    )

    assert bot.deleted == [1]
    error = bot.sent[-1]
    assert "&lt; 20MB &amp; &gt; 1px" in error["text"]
    assert "<" not in error["text"].replace("&lt;", "")
    assert any(ACTION_CREATE in a for a in callback_actions(error["reply_markup"]))
    assert bot.photos == []


async def test_error_without_message_shows_generic_text():
    bot = await run_session(GenerationError(kind=GenerationErrorKind.UNKNOWN))

    assert GENERIC_ERROR_MESSAGE in bot.sent[-1]["text"]


async def test_image_selection_alone_sends_nothing():
    bot = FakeBot()

    async def _generate(child_image: str, adult_image: str):
        return GenerationSuccess(image_ref="OUT")

    session = GenerationSession(_generate)
    session.subscribe(SessionView(bot, chat_id=7))
    await session.set_child_image("C")

    assert bot.sent == []
