# revisualise_bot/services/clients/base.py
from __future__ import annotations
from typing import Any, ClassVar

from pydantic import BaseModel

from revisualise_bot.data.constants import GenerationErrorKind


class AIClientResponse(BaseModel):
    """Standardized response from every image provider client."""
    image_bytes: bytes
    content_type: str = "image/png"
    response_payload: dict[str, Any]


class ImageClientError(Exception):
    """
    Base class for provider failures.

    Each subclass pins the GenerationErrorKind it maps to. The exception
    message is shown to users, so it must never carry internals.
    """
    kind: ClassVar[GenerationErrorKind] = GenerationErrorKind.UNKNOWN
    default_message: ClassVar[str | None] = None

    def __init__(self, message: str | None = None) -> None:
        self.message = message if message is not None else self.default_message
        super().__init__(self.message or "")


class TransportError(ImageClientError):
    kind = GenerationErrorKind.TRANSPORT_FAILURE
    default_message = (
        "We couldn't reach the image service. Please check your connection and try again."
    )


class ServiceRejectedError(ImageClientError):
    kind = GenerationErrorKind.SERVICE_REJECTION
    default_message = "The image service declined this request. Please try different photos."


class EmptyResponseError(ImageClientError):
    kind = GenerationErrorKind.EMPTY_RESPONSE
    default_message = "The image service didn't return a picture this time. Please try again."


class ResponseDecodeError(ImageClientError):
    kind = GenerationErrorKind.DECODE_FAILURE
    default_message = "The image service returned something we couldn't read. Please try again."
