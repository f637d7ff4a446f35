# revisualise_bot/services/clients/factory.py
from __future__ import annotations
from typing import Any

from revisualise_bot.data.settings import settings

from .google_ai_client import GoogleGeminiClient
from .mock_ai_client import MockAIClient
from .openrouter_client import OpenRouterClient

_CLIENT_CLASSES: dict[str, type[Any]] = {
    "mock": MockAIClient,
    "google": GoogleGeminiClient,
    "openrouter": OpenRouterClient,
}


def _create_client_instance(client_name: str) -> Any:
    client_class = _CLIENT_CLASSES.get(client_name)
    if not client_class:
        raise ValueError(f"Unknown client type specified in config: '{client_name}'")
    return client_class()


def get_ai_client(client_name: str) -> Any:
    """
    Creates an AI client instance for a given client name.
    """
    return _create_client_instance(client_name.lower())


def get_ai_client_and_model() -> tuple[Any, str]:
    """
    Creates the configured image client and returns it along with the model name.
    """
    generation_config = settings.generation
    client_instance = get_ai_client(generation_config.client)
    return client_instance, generation_config.model
