import io

import pytest
from PIL import Image

from revisualise_bot.services.clients import factory
from revisualise_bot.services.clients.mock_ai_client import MockAIClient
from tests.helpers import make_png


def test_get_ai_client_builds_mock_case_insensitively():
    assert isinstance(factory.get_ai_client("MOCK"), MockAIClient)


def test_unknown_client_raises():
    with pytest.raises(ValueError, match="Unknown client type"):
        factory.get_ai_client("dall-e-9000")


def test_get_ai_client_and_model_reads_settings(monkeypatch):
    monkeypatch.setattr(factory.settings.generation, "client", "mock")
    monkeypatch.setattr(factory.settings.generation, "model", "mock-model")

    client, model = factory.get_ai_client_and_model()

    assert isinstance(client, MockAIClient)
    assert model == "mock-model"


async def test_mock_client_places_inputs_side_by_side():
    client = MockAIClient(delay=0)

    response = await client.images.generate(
        prompt="hug",
        images=[(make_png("yellow"), "image/png"), (b"broken", "image/png")],
        model="mock",
    )

    with Image.open(io.BytesIO(response.image_bytes)) as img:
        assert img.format == "PNG"
        assert img.size == (1024, 512)
        assert img.getpixel((10, 10)) == (255, 255, 0)
    assert response.response_payload["inputs"] == 2
