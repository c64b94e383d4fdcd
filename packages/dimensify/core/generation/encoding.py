"""Self-describing ``data:`` URIs for binary generation output."""

from __future__ import annotations

import base64
import binascii

DATA_URI_PREFIX = "data:"
_BASE64_MARKER = ";base64,"


def encode_data_uri(payload: bytes, media_type: str) -> str:
    """Encode ``payload`` as ``data:<media_type>;base64,<...>``.

    Example:
        >>> encode_data_uri(b"\\x00\\x01", "video/mp4")
        'data:video/mp4;base64,AAE='
    """
    encoded = base64.b64encode(payload).decode("ascii")
    return f"{DATA_URI_PREFIX}{media_type}{_BASE64_MARKER}{encoded}"


def decode_data_uri(uri: str) -> tuple[str, bytes]:
    """Split a base64 data URI into ``(media_type, payload)``.

    Raises:
        ValueError: If ``uri`` is not a base64 data URI
    """
    if not uri.startswith(DATA_URI_PREFIX) or _BASE64_MARKER not in uri:
        raise ValueError("Not a base64 data URI")
    header, _, encoded = uri[len(DATA_URI_PREFIX) :].partition(_BASE64_MARKER)
    try:
        payload = base64.b64decode(encoded, validate=True)
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload in data URI: {e}") from e
    return header, payload
