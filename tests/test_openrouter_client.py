import asyncio

import aiohttp
import pytest
from pydantic import SecretStr

from revisualise_bot.data.constants import GenerationErrorKind
from revisualise_bot.services.clients import openrouter_client
from revisualise_bot.services.clients.base import (
    EmptyResponseError,
    ResponseDecodeError,
    ServiceRejectedError,
    TransportError,
)
from revisualise_bot.services.clients.openrouter_client import (
    OpenRouterClient,
    _error_message,
    extract_image_data_url,
)
from revisualise_bot.services.utils import to_data_uri
from tests.helpers import make_png


def test_extracts_first_image_url():
    result = {
        "choices": [
            {
                "message": {
                    "content": "Here is your image",
                    "images": [
                        {"type": "image_url", "image_url": {"url": "data:image/png;base64,AAAA"}},
                        {"type": "image_url", "image_url": {"url": "data:image/png;base64,BBBB"}},
                    ],
                }
            }
        ]
    }

    assert extract_image_data_url(result) == "data:image/png;base64,AAAA"


@pytest.mark.parametrize(
    "result",
    [
        {"choices": []},
        {"choices": [{"message": {"content": "no picture for you"}}]},
        {"choices": [{"message": {"images": []}}]},
    ],
)
def test_missing_image_is_empty_response(result):
    with pytest.raises(EmptyResponseError):
        extract_image_data_url(result)


@pytest.mark.parametrize(
    "result",
    [
        {},
        {"choices": [{"no_message": True}]},
        {"choices": [{"message": {"images": [{"image_url": None}]}}]},
    ],
)
def test_malformed_structure_is_decode_failure(result):
    with pytest.raises(ResponseDecodeError):
        extract_image_data_url(result)


def test_error_message_extraction():
    assert _error_message({"error": {"message": "Insufficient credits", "code": 402}}) == "Insufficient credits"
    assert _error_message({"error": "rate limited"}) == "rate limited"
    assert _error_message({"choices": []}) is None
    assert _error_message(["unexpected"]) is None


class FakeResponse:
    def __init__(self, status: int, body=None, error: Exception | None = None) -> None:
        self.status = status
        self.body = body
        self.error = error

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        return None

    async def json(self, content_type=None):
        if self.error is not None:
            raise self.error
        return self.body


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: list[dict] = []

    def post(self, url, headers=None, json=None):
        self.requests.append({"url": url, "headers": headers, "json": json})
        if self.error is not None:
            raise self.error
        return self.response


class FakeHttpClient:
    def __init__(self, session: FakeSession) -> None:
        self._session = session

    async def session(self) -> FakeSession:
        return self._session


@pytest.fixture
def use_session(monkeypatch):
    monkeypatch.setattr(openrouter_client.settings.api_urls, "openrouter_api_key", SecretStr("test-key"))

    def _use(session: FakeSession) -> OpenRouterClient:
        monkeypatch.setattr(openrouter_client, "http_client", FakeHttpClient(session))
        return OpenRouterClient()

    return _use


async def generate(client: OpenRouterClient):
    return await client.images.generate(
        prompt="hug", images=[(make_png(), "image/png")], model="test/model", temperature=0.5
    )


async def test_generate_returns_decoded_image(use_session):
    image = make_png("green")
    body = {
        "id": "gen-1",
        "model": "test/model",
        "choices": [{"message": {"images": [{"image_url": {"url": to_data_uri(image, "image/png")}}]}}],
    }
    session = FakeSession(FakeResponse(200, body))

    response = await generate(use_session(session))

    assert response.image_bytes == image
    assert response.content_type == "image/png"
    sent = session.requests[0]
    assert sent["headers"]["Authorization"] == "Bearer test-key"
    assert sent["json"]["temperature"] == 0.5
    assert sent["json"]["messages"][0]["content"][1]["image_url"]["url"].startswith("data:image/png;base64,")


async def test_http_error_status_is_service_rejection(use_session):
    session = FakeSession(FakeResponse(402, {"error": {"message": "Insufficient credits"}}))

    with pytest.raises(ServiceRejectedError) as exc_info:
        await generate(use_session(session))

    assert exc_info.value.kind is GenerationErrorKind.SERVICE_REJECTION
    assert exc_info.value.message == "Insufficient credits"


async def test_error_body_with_ok_status_is_service_rejection(use_session):
    session = FakeSession(FakeResponse(200, {"error": "Provider returned error"}))

    with pytest.raises(ServiceRejectedError):
        await generate(use_session(session))


@pytest.mark.parametrize(
    "error",
    [aiohttp.ClientConnectionError("connection reset"), asyncio.TimeoutError()],
)
async def test_network_failure_is_transport_error(use_session, error):
    with pytest.raises(TransportError) as exc_info:
        await generate(use_session(FakeSession(error=error)))

    assert exc_info.value.kind is GenerationErrorKind.TRANSPORT_FAILURE


async def test_non_json_body_is_decode_failure(use_session):
    session = FakeSession(FakeResponse(502, error=ValueError("Expecting value")))

    with pytest.raises(ResponseDecodeError) as exc_info:
        await generate(use_session(session))

    assert exc_info.value.kind is GenerationErrorKind.DECODE_FAILURE


async def test_unparseable_image_url_is_decode_failure(use_session):
    body = {"choices": [{"message": {"images": [{"image_url": {"url": "https://example.com/a.png"}}]}}]}

    with pytest.raises(ResponseDecodeError):
        await generate(use_session(FakeSession(FakeResponse(200, body))))
