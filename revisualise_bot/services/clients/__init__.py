# revisualise_bot/services/clients/__init__.py
from .base import (
    AIClientResponse,
    EmptyResponseError,
    ImageClientError,
    ResponseDecodeError,
    ServiceRejectedError,
    TransportError,
)
from .factory import get_ai_client, get_ai_client_and_model

__all__ = [
    "AIClientResponse",
    "EmptyResponseError",
    "ImageClientError",
    "ResponseDecodeError",
    "ServiceRejectedError",
    "TransportError",
    "get_ai_client",
    "get_ai_client_and_model",
]
