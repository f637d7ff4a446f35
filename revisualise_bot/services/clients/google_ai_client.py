# revisualise_bot/services/clients/google_ai_client.py
from __future__ import annotations
import asyncio
import json
from typing import Any, List

import httpx
import structlog

from revisualise_bot.data.settings import settings
from .base import (
    AIClientResponse,
    EmptyResponseError,
    ResponseDecodeError,
    ServiceRejectedError,
    TransportError,
)

# Google Gen AI SDK
from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from google.genai.types import Modality

# Service account credentials
from google.oauth2.service_account import Credentials

logger = structlog.get_logger(__name__)

_SAFETY_FINISH_REASONS = {
    "SAFETY",
    "PROHIBITED_CONTENT",
    "BLOCKLIST",
    "SPII",
    "IMAGE_SAFETY",
    "IMAGE_PROHIBITED_CONTENT",
}


def _reason_name(reason: Any) -> str:
    return getattr(reason, "name", None) or str(reason or "UNKNOWN")


def _serialize_response(resp: Any) -> dict:
    """Safe, small logging payload; redacts inline image bytes."""
    if not resp:
        return {}
    out: dict[str, Any] = {"candidates": []}
    for c in getattr(resp, "candidates", None) or []:
        content = getattr(c, "content", None)
        out_parts = []
        for p in getattr(content, "parts", None) or []:
            inline = getattr(p, "inline_data", None)
            if inline and getattr(inline, "data", None):
                out_parts.append({
                    "inline_data": {
                        "mime_type": getattr(inline, "mime_type", None) or "image/png",
                        "data": f"<redacted {len(inline.data)} bytes>",
                    }
                })
            elif getattr(p, "text", None):
                out_parts.append({"text": p.text})
        out["candidates"].append({
            "finish_reason": _reason_name(getattr(c, "finish_reason", None)),
            "parts": out_parts,
        })
    feedback = getattr(resp, "prompt_feedback", None)
    if feedback and getattr(feedback, "block_reason", None):
        out["block_reason"] = _reason_name(feedback.block_reason)
    return out


def _pick_best_inline_image(parts: List[Any]) -> tuple[Any, str] | None:
    """Return the largest inline image (data, mime) from parts."""
    best: tuple[int, Any, str] | None = None
    for p in parts or []:
        inline = getattr(p, "inline_data", None)
        if inline and getattr(inline, "data", None):
            data = inline.data
            mime = getattr(inline, "mime_type", None) or "image/png"
            size = len(data)
            if best is None or size > best[0]:
                best = (size, data, mime)
    if best:
        _, data, mime = best
        return data, mime
    return None


def _build_genai_client() -> genai.Client:
    if settings.api_urls.google_api_key:
        logger.info("GenAI client initialized (Gemini API key).")
        return genai.Client(api_key=settings.api_urls.google_api_key.get_secret_value())

    google = settings.google
    if not (google.project_id and google.service_account_creds_json):
        raise RuntimeError(
            "Missing Google configuration. Set API_URLS__GOOGLE_API_KEY, or "
            "GOOGLE__PROJECT_ID and GOOGLE__SERVICE_ACCOUNT_CREDS_JSON for Vertex AI."
        )

    try:
        creds_info = json.loads(google.service_account_creds_json.get_secret_value())
        base_creds = Credentials.from_service_account_info(creds_info)
        scoped_creds = base_creds.with_scopes(
            ["https://www.googleapis.com/auth/cloud-platform"]
        )
        client = genai.Client(
            vertexai=True,
            project=google.project_id,
            location=google.location,
            credentials=scoped_creds,
        )
    except Exception:
        logger.exception("Failed to initialize Google Gen AI client.")
        raise
    logger.info("GenAI client initialized (Vertex AI backend).")
    return client


class _ImagesNamespace:
    """
    Handles image generation via the Gemini API using google-genai.

    Notes:
      - Default model is 'gemini-2.5-flash-image'.
      - Async call through client.aio.models.generate_content.
    """
    DEFAULT_MODEL = "gemini-2.5-flash-image"

    def __init__(self, genai_client: Any | None = None) -> None:
        self._client = genai_client or _build_genai_client()

    async def generate(
        self,
        *,
        prompt: str,
        images: list[tuple[bytes, str]],
        model: str | None = None,
        temperature: float = 0.6,
        aspect_ratio: str = "1:1",
        top_p: float = 0.95,
        top_k: int = 32,
        candidate_count: int = 1,
        **_kwargs: Any,
    ) -> AIClientResponse:
        """Generate one image from a prompt and inline reference images."""
        model_name = model or self.DEFAULT_MODEL
        log = logger.bind(model=model_name, image_count=len(images))

        parts: List[Any] = [prompt]
        parts.extend(
            types.Part.from_bytes(data=data, mime_type=mime) for data, mime in images
        )

        gen_config = types.GenerateContentConfig(
            temperature=temperature,
            top_p=top_p,
            top_k=top_k,
            candidate_count=candidate_count,
            response_modalities=[Modality.TEXT, Modality.IMAGE],
            image_config=types.ImageConfig(aspect_ratio=aspect_ratio),
        )

        log.info("Calling Gemini for image generation.")
        try:
            response = await self._client.aio.models.generate_content(
                model=model_name,
                contents=parts,
                config=gen_config,
            )
        except genai_errors.APIError as e:
            log.error("Gemini API rejected the request", code=e.code, status=e.status)
            raise ServiceRejectedError(e.message or None) from e
        except (httpx.TransportError, asyncio.TimeoutError, OSError) as e:
            log.error("Transport failure calling Gemini", error=repr(e))
            raise TransportError() from e

        payload = _serialize_response(response)

        feedback = getattr(response, "prompt_feedback", None)
        if feedback and getattr(feedback, "block_reason", None):
            log.warning("Prompt blocked by Gemini.", payload=payload)
            raise ServiceRejectedError(
                "The image service declined these photos for safety reasons. "
                "Please try different photos."
            )

        if not response or not getattr(response, "candidates", None):
            log.error("Empty or invalid response from Gemini.", payload=payload)
            raise EmptyResponseError()

        candidate = response.candidates[0]
        content = getattr(candidate, "content", None)
        picked = _pick_best_inline_image(getattr(content, "parts", None) or [])

        if not picked:
            finish_reason = _reason_name(getattr(candidate, "finish_reason", None))
            log.error("No inline image in response.", reason=finish_reason, payload=payload)
            if finish_reason in _SAFETY_FINISH_REASONS:
                raise ServiceRejectedError(
                    "The image service declined these photos for safety reasons. "
                    "Please try different photos."
                )
            raise EmptyResponseError()

        image_bytes, content_type = picked
        if not isinstance(image_bytes, (bytes, bytearray)):
            log.error("Inline image payload is not binary.", payload=payload)
            raise ResponseDecodeError()

        return AIClientResponse(
            image_bytes=bytes(image_bytes),
            content_type=content_type,
            response_payload=payload,
        )


class GoogleGeminiClient:
    """Gemini client focused on image generation."""
    def __init__(self, genai_client: Any | None = None, **_kwargs: Any) -> None:
        self.images = _ImagesNamespace(genai_client)
