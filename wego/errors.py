"""Error taxonomy for wego.

Every failure raised by the client, decoder, materializer or configuration
layer derives from :class:`WegoError`, so callers that isolate failures per
tree node only need a single ``except`` clause.
"""

from __future__ import annotations


class WegoError(Exception):
    """Base class for all wego errors."""


class ConfigError(WegoError):
    """Raised when the local configuration is missing or invalid."""


class TransportError(WegoError):
    """Raised when a request fails before a response arrives (connect, timeout)."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        super().__init__(f"Request to {url} failed: {message}")


_STATUS_HINTS: dict[int, str] = {
    401: "check github_api_token",
    403: "token lacks access or the API rate limit was hit",
    404: "check the template path and target_branch",
}


class RemoteError(WegoError):
    """Raised when the remote API answers with a non-200 status."""

    def __init__(self, status: int, url: str, message: str = "") -> None:
        self.status = status
        self.url = url
        self.message = message
        text = f"Request remote dir failure, code: {status} ({url})"
        hint = _STATUS_HINTS.get(status)
        if hint:
            text += f" -- {hint}"
        if message:
            text += f": {message}"
        super().__init__(text)


class DecodeError(WegoError):
    """Raised when a response body does not match the expected shape."""


class EncodingError(WegoError):
    """Raised when a base64 payload or its UTF-8 text cannot be decoded."""


class FilesystemError(WegoError):
    """Raised when a local directory or file cannot be created or written."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Write local file failure: {path}: {message}")
