# File: revisualise_bot/services/generation_client.py
import time
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from revisualise_bot.data.constants import GenerationErrorKind
from revisualise_bot.dto.generation import (
    GenerationError,
    GenerationOutcome,
    GenerationSuccess,
)
from revisualise_bot.services.clients.base import (
    EmptyResponseError,
    ImageClientError,
    ResponseDecodeError,
)
from revisualise_bot.services.prompting import PROMPT_REVISUALISE_DEFAULT
from revisualise_bot.services.utils import guess_mime, parse_data_uri, to_data_uri

logger = structlog.get_logger(__name__)

GenerateFunc = Callable[[str, str], Awaitable[GenerationOutcome]]

_UNREADABLE_INPUT_MESSAGE = "One of your photos couldn't be read. Please choose it again."


async def generate(
    child_image: str,
    adult_image: str,
    *,
    ai_client: Any,
    model: str,
    prompt: str = PROMPT_REVISUALISE_DEFAULT,
    params: dict[str, Any] | None = None,
) -> GenerationOutcome:
    """
    Asks the image provider for one composite of the child and adult photos.

    Never raises: every failure, expected or not, comes back as a
    GenerationError so callers can branch on `kind`.
    """
    log = logger.bind(model=model)

    try:
        images = [parse_data_uri(child_image), parse_data_uri(adult_image)]
    except ValueError:
        log.warning("Input image is not a valid data URI")
        return GenerationError(
            kind=GenerationErrorKind.DECODE_FAILURE, message=_UNREADABLE_INPUT_MESSAGE
        )

    start_time = time.monotonic()
    try:
        log.info("Sending request to Image Generation API", image_count=len(images))
        response = await ai_client.images.generate(
            model=model, prompt=prompt, images=images, **(params or {})
        )
    except ImageClientError as e:
        log.warning(
            "Image generation failed",
            kind=e.kind.value,
            generation_time_ms=int((time.monotonic() - start_time) * 1000),
        )
        return GenerationError(kind=e.kind, message=e.message)
    except Exception:
        log.exception("An unexpected error occurred during image generation")
        return GenerationError(kind=GenerationErrorKind.UNKNOWN)

    generation_time_ms = int((time.monotonic() - start_time) * 1000)

    image_bytes = getattr(response, "image_bytes", None)
    if not image_bytes:
        log.error("Client response is missing image data.")
        return GenerationError(kind=EmptyResponseError.kind, message=EmptyResponseError.default_message)

    try:
        content_type = guess_mime(image_bytes)
    except ValueError:
        log.error("Client returned bytes that are not an image.", size=len(image_bytes))
        return GenerationError(kind=ResponseDecodeError.kind, message=ResponseDecodeError.default_message)

    log.info("Image generation successful", generation_time_ms=generation_time_ms, content_type=content_type)
    return GenerationSuccess(image_ref=to_data_uri(image_bytes, content_type))


def build_generate_func(ai_client: Any, model: str, **params: Any) -> GenerateFunc:
    """Binds a provider client and model into the two-argument generate call."""
    async def _generate(child_image: str, adult_image: str) -> GenerationOutcome:
        return await generate(
            child_image, adult_image, ai_client=ai_client, model=model, params=params
        )

    return _generate
