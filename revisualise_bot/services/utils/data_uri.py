import base64
import binascii
import io
import re

from PIL import Image, UnidentifiedImageError

_DATA_URI_RE = re.compile(r"^data:(image/[\w.+-]+);base64,(.+)$", re.DOTALL)

_FORMAT_TO_MIME = {
    "PNG": "image/png",
    "JPEG": "image/jpeg",
    "WEBP": "image/webp",
    "GIF": "image/gif",
}


def parse_data_uri(data_uri: str) -> tuple[bytes, str]:
    """Parses a base64 image data URI and returns the decoded bytes and mime type."""
    match = _DATA_URI_RE.match(data_uri.strip())
    if not match:
        raise ValueError("Invalid data URI format")

    mime_type, b64_data = match.groups()
    try:
        image_bytes = base64.b64decode(b64_data, validate=True)
    except binascii.Error as e:
        raise ValueError("Data URI payload is not valid base64") from e
    return image_bytes, mime_type


def to_data_uri(image_bytes: bytes, mime_type: str) -> str:
    encoded = base64.b64encode(image_bytes).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def guess_mime(data: bytes) -> str:
    """
    Detects the image format of raw bytes with Pillow.

    Raises:
        ValueError: if the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise ValueError("Bytes are not a decodable image") from e
    # fallback
    return _FORMAT_TO_MIME.get(fmt or "", "image/png")


def to_png(image_bytes: bytes) -> bytes:
    """Re-encodes any readable image as PNG. PNG input is returned as is."""
    with Image.open(io.BytesIO(image_bytes)) as img:
        if img.format == "PNG":
            return image_bytes
        if img.mode not in ("RGB", "RGBA", "L", "LA", "P"):
            img = img.convert("RGBA")
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
    return buffer.getvalue()
