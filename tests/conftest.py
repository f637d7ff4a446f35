import pytest

from revisualise_bot.services.clients.base import AIClientResponse
from revisualise_bot.services.utils import to_data_uri
from tests.helpers import make_png


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def child_uri() -> str:
    return to_data_uri(make_png("yellow"), "image/png")


@pytest.fixture
def adult_uri() -> str:
    return to_data_uri(make_png("blue"), "image/png")


@pytest.fixture
def ok_response(png_bytes: bytes) -> AIClientResponse:
    return AIClientResponse(image_bytes=png_bytes, response_payload={"fake": True})
