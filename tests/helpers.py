import io
from typing import Any

from PIL import Image


def make_png(color: str = "red", size: tuple[int, int] = (8, 8)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


class FakeImages:
    """Stands in for a provider's `images` namespace and records its calls."""

    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


class FakeAIClient:
    def __init__(self, result: Any = None, error: Exception | None = None) -> None:
        self.images = FakeImages(result, error)
