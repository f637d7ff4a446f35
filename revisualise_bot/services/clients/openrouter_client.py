# revisualise_bot/services/clients/openrouter_client.py
from __future__ import annotations
import asyncio
from typing import Any

import aiohttp
import structlog

from revisualise_bot.data.settings import settings
from revisualise_bot.services.utils import http_client, parse_data_uri, to_data_uri
from .base import (
    AIClientResponse,
    EmptyResponseError,
    ResponseDecodeError,
    ServiceRejectedError,
    TransportError,
)

logger = structlog.get_logger(__name__)


def _error_message(result_json: Any) -> str | None:
    if isinstance(result_json, dict):
        error = result_json.get("error")
        if isinstance(error, dict):
            return error.get("message")
        if isinstance(error, str):
            return error
    return None


def extract_image_data_url(result_json: dict[str, Any]) -> str:
    """
    Navigates the OpenRouter chat completion structure to the first image.

    Raises:
        EmptyResponseError: if the response carries no image.
        ResponseDecodeError: if the structure is not what OpenRouter documents.
    """
    try:
        choices = result_json["choices"]
        if not choices:
            raise EmptyResponseError()
        images = choices[0]["message"].get("images") or []
        if not images:
            raise EmptyResponseError()
        return images[0]["image_url"]["url"]
    except (KeyError, IndexError, TypeError, AttributeError) as e:
        raise ResponseDecodeError() from e


class _ImagesNamespace:
    """Handles the image generation logic for OpenRouter."""
    def __init__(self) -> None:
        if not settings.api_urls.openrouter_api_key:
            raise RuntimeError("Missing API key for OpenRouter. Set env var API_URLS__OPENROUTER_API_KEY.")

        self.api_url = f"{str(settings.api_urls.openrouter).strip('/')}/chat/completions"
        self.api_key = settings.api_urls.openrouter_api_key.get_secret_value()
        logger.info("OpenRouterClient initialized for image generation.")

    async def generate(
        self,
        *,
        prompt: str,
        images: list[tuple[bytes, str]],
        model: str,
        temperature: float | None = None,
        **_kwargs: Any,
    ) -> AIClientResponse:
        """
        Calls the OpenRouter chat completions endpoint with image generation modalities.
        """
        content: list[dict[str, Any]] = [{"type": "text", "text": prompt}]
        for data, mime in images:
            content.append({"type": "image_url", "image_url": {"url": to_data_uri(data, mime)}})

        payload: dict[str, Any] = {
            "model": model,
            "modalities": ["image", "text"],
            "messages": [{"role": "user", "content": content}],
        }
        if temperature is not None:
            payload["temperature"] = temperature

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        log = logger.bind(model=model, api_url=self.api_url)
        log.info("Sending request to OpenRouter Image Generation API")

        session = await http_client.session()
        try:
            async with session.post(self.api_url, headers=headers, json=payload) as resp:
                try:
                    result_json = await resp.json(content_type=None)
                except ValueError as e:
                    log.error("OpenRouter returned a non-JSON body", status=resp.status)
                    raise ResponseDecodeError() from e
                if resp.status >= 400:
                    log.error("OpenRouter rejected the request", status=resp.status, response=result_json)
                    raise ServiceRejectedError(_error_message(result_json))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            log.error("Transport failure calling OpenRouter", error=repr(e))
            raise TransportError() from e

        if not isinstance(result_json, dict):
            raise ResponseDecodeError()
        if message := _error_message(result_json):
            raise ServiceRejectedError(message)

        img_data_url = extract_image_data_url(result_json)
        try:
            image_bytes, content_type = parse_data_uri(img_data_url)
        except (ValueError, AttributeError) as e:
            log.error("Failed to parse image from OpenRouter response", error=str(e))
            raise ResponseDecodeError() from e

        return AIClientResponse(
            image_bytes=image_bytes,
            content_type=content_type,
            response_payload={"id": result_json.get("id"), "model": result_json.get("model")},
        )


class OpenRouterClient:
    def __init__(self, **_kwargs: Any) -> None:
        self.images = _ImagesNamespace()
