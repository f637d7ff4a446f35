# revisualise_bot/services/clients/mock_ai_client.py
from __future__ import annotations
import asyncio
import io
from typing import Any

import structlog
from PIL import Image, ImageOps, UnidentifiedImageError

from .base import AIClientResponse

logger = structlog.get_logger(__name__)

_TILE_SIZE = (512, 512)


def _compose_side_by_side(images: list[tuple[bytes, str]]) -> bytes:
    tiles = []
    for data, _mime in images:
        try:
            with Image.open(io.BytesIO(data)) as src:
                tile = ImageOps.fit(src.convert("RGB"), _TILE_SIZE)
        except (UnidentifiedImageError, OSError):
            logger.warning("MOCK Images: unreadable input, using a grey tile.")
            tile = Image.new("RGB", _TILE_SIZE, "gray")
        tiles.append(tile)

    if not tiles:
        tiles.append(Image.new("RGB", _TILE_SIZE, "darkblue"))

    canvas = Image.new("RGB", (_TILE_SIZE[0] * len(tiles), _TILE_SIZE[1]), "white")
    for i, tile in enumerate(tiles):
        canvas.paste(tile, (i * _TILE_SIZE[0], 0))

    buffer = io.BytesIO()
    canvas.save(buffer, format="PNG")
    return buffer.getvalue()


class _MockImagesNamespace:
    def __init__(self, delay: float = 1.0) -> None:
        self.delay = delay

    async def generate(self, *, images: list[tuple[bytes, str]], **kwargs: Any) -> AIClientResponse:
        logger.info("MOCK Images: Simulating image generation...", model=kwargs.get("model"))
        await asyncio.sleep(self.delay)

        image_bytes = _compose_side_by_side(images)
        return AIClientResponse(
            image_bytes=image_bytes,
            content_type="image/png",
            response_payload={"mock_data": True, "inputs": len(images)},
        )


class MockAIClient:
    def __init__(self, delay: float = 1.0, **_kwargs: Any) -> None:
        self.images = _MockImagesNamespace(delay)
