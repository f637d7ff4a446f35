import asyncio
import io
from types import SimpleNamespace

from aiogram.fsm.context import FSMContext
from aiogram.fsm.storage.base import StorageKey
from aiogram.fsm.storage.memory import MemoryStorage

from revisualise_bot.dto.generation import GenerationSuccess
from revisualise_bot.handlers.photo_handler import receive_photo
from revisualise_bot.services.session_registry import SessionRegistry
from revisualise_bot.services.utils import to_data_uri
from revisualise_bot.states.user import Intake
from tests.helpers import make_png


async def _generate(child_image: str, adult_image: str):
    return GenerationSuccess(image_ref="OUT")


class FakeBot:
    """Serves file bytes by file id, yielding to the loop like a network call."""

    def __init__(self, files: dict[str, bytes]) -> None:
        self.files = files

    async def get_file(self, file_id: str):
        await asyncio.sleep(0)
        return SimpleNamespace(file_path=file_id)

    async def download_file(self, file_path: str):
        await asyncio.sleep(0.01)
        return io.BytesIO(self.files[file_path])


class FakeMessage:
    def __init__(self, chat_id: int, file_id: str, media_group_id: str | None = None) -> None:
        self.chat = SimpleNamespace(id=chat_id)
        self.photo = [SimpleNamespace(file_id=file_id, file_unique_id=f"u-{file_id}", width=8, height=8)]
        self.document = None
        self.media_group_id = media_group_id
        self.answers: list[str] = []

    async def answer(self, text: str, **kwargs) -> None:
        self.answers.append(text)


def make_context(chat_id: int) -> FSMContext:
    return FSMContext(storage=MemoryStorage(), key=StorageKey(bot_id=1, chat_id=chat_id, user_id=chat_id))


async def test_album_of_two_fills_child_then_adult():
    chat_id = 501
    child, adult = make_png("yellow"), make_png("blue")
    bot = FakeBot({"first": child, "second": adult})
    registry = SessionRegistry(_generate)
    state = make_context(chat_id)
    await state.set_state(Intake.child_photo)

    await asyncio.gather(
        receive_photo(FakeMessage(chat_id, "first", "album-1"), state, bot, registry),
        receive_photo(FakeMessage(chat_id, "second", "album-1"), state, bot, registry),
    )

    session = registry.get(chat_id)
    assert session.state.child_image.data_uri == to_data_uri(child, "image/png")
    assert session.state.adult_image.data_uri == to_data_uri(adult, "image/png")
    assert session.state.is_ready


async def test_sequential_photos_fill_both_slots():
    chat_id = 502
    child, adult = make_png("yellow"), make_png("blue")
    bot = FakeBot({"first": child, "second": adult})
    registry = SessionRegistry(_generate)
    state = make_context(chat_id)

    first, second = FakeMessage(chat_id, "first"), FakeMessage(chat_id, "second")
    await receive_photo(first, state, bot, registry)
    assert await state.get_state() == Intake.adult_photo.state
    await receive_photo(second, state, bot, registry)

    session = registry.get(chat_id)
    assert session.state.is_ready
    assert "child" in first.answers[0]
    assert "adult" in second.answers[0]


async def test_extra_album_photos_are_ignored():
    chat_id = 503
    bot = FakeBot({"a": make_png("yellow"), "b": make_png("blue"), "c": make_png("green")})
    registry = SessionRegistry(_generate)
    state = make_context(chat_id)
    third = FakeMessage(chat_id, "c", "album-2")

    await asyncio.gather(
        receive_photo(FakeMessage(chat_id, "a", "album-2"), state, bot, registry),
        receive_photo(FakeMessage(chat_id, "b", "album-2"), state, bot, registry),
        receive_photo(third, state, bot, registry),
    )

    session = registry.get(chat_id)
    assert session.state.adult_image.data_uri == to_data_uri(make_png("blue"), "image/png")
    assert third.answers == []


async def test_unreadable_file_is_rejected():
    chat_id = 504
    bot = FakeBot({"junk": b"definitely not an image"})
    registry = SessionRegistry(_generate)
    state = make_context(chat_id)
    msg = FakeMessage(chat_id, "junk")

    await receive_photo(msg, state, bot, registry)

    assert registry.get(chat_id).state.child_image is None
    assert "doesn't look like a photo" in msg.answers[0]
