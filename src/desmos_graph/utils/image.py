"""Image payload conversion utilities."""

from __future__ import annotations

import base64
import binascii
import re

_DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<payload>.*)$", re.DOTALL)


def image_to_base64(image_bytes: bytes) -> str:
    """Encode raw image bytes to a base64 string."""
    return base64.b64encode(image_bytes).decode("ascii")


def to_data_url(image_bytes: bytes, mime: str = "image/png") -> str:
    """Wrap raw image bytes in a base64 data URL."""
    return f"data:{mime};base64,{image_to_base64(image_bytes)}"


def decode_data_url(data_url: str) -> bytes:
    """Decode a base64 data URL (as posted by the renderer) into raw bytes.

    Raises ValueError if the payload is not a base64 data URL.
    """
    match = _DATA_URL_RE.match(data_url.strip())
    if match is None:
        raise ValueError("Expected a base64 data URL")
    try:
        return base64.b64decode(match.group("payload"), validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 image payload: {e}") from e
