"""Base64 content decoding for files fetched from the contents API.

The API wraps base64 bodies at 60 columns, so whitespace is stripped before
decoding. Decoding failures raise :class:`~wego.errors.EncodingError` so the
materializer can skip the one file and carry on with its siblings.
"""

from __future__ import annotations

import base64
import binascii

from wego.errors import EncodingError
from wego.models import RemoteContent

_WHITESPACE = b" \t\n\r\x0b\x0c"


def _payload(content: RemoteContent | str) -> str:
    if isinstance(content, RemoteContent):
        return content.content
    return content


def decode_bytes(content: RemoteContent | str) -> bytes:
    """Decode a standard (not URL-safe) base64 payload to raw bytes.

    Args:
        content: A ``RemoteContent`` or its raw ``content`` string.

    Raises:
        EncodingError: If the payload is not valid base64, or the content
            object reports another encoding (the API sends ``"none"`` with an
            empty body for files over 1 MB).
    """
    if isinstance(content, RemoteContent) and content.encoding != "base64":
        raise EncodingError(f"Unsupported content encoding {content.encoding!r} for {content.path}")
    try:
        raw = _payload(content).encode("ascii")
    except UnicodeEncodeError as exc:
        raise EncodingError(f"Base64 payload contains non-ASCII characters: {exc}") from exc

    stripped = raw.translate(None, _WHITESPACE)
    try:
        return base64.b64decode(stripped, validate=True)
    except binascii.Error as exc:
        raise EncodingError(f"Invalid base64 payload: {exc}") from exc


def decode_text(content: RemoteContent | str) -> str:
    """Decode a base64 payload and interpret it as UTF-8 text.

    Raises:
        EncodingError: If the payload is not valid base64 or not valid UTF-8.
    """
    data = decode_bytes(content)
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise EncodingError(f"Content is not valid UTF-8: {exc}") from exc
