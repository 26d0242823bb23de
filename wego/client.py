"""Async client for the GitHub contents API.

Wraps ``GET /repos/{owner}/{repo}/contents/{path}`` for directory listings,
file contents and the remote manifest. One ``httpx.AsyncClient`` is shared by
every concurrent call made through a ``RemoteClient`` instance, and a
semaphore caps how many requests are in flight at once.

Typical usage::

    async with RemoteClient.from_config(config) as client:
        entries = await client.fetch_directory(url)
        content = await client.fetch_content(entries[0].url)
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from wego.config import WegoConfig
from wego.decoder import decode_text
from wego.errors import DecodeError, RemoteError, TransportError
from wego.models import RemoteContent, RemoteDirEntry, RemoteManifest

USER_AGENT = "wego"

_DIR_LISTING = TypeAdapter(list[RemoteDirEntry])


class RemoteClient:
    """Async client for the contents API of one repository branch.

    Every call is a single GET with no retries. Failures surface as
    ``TransportError``, ``RemoteError`` or ``DecodeError`` and are left to the
    caller to isolate.
    """

    def __init__(
        self,
        token: str = "",
        branch: str = "main",
        timeout: float = 30.0,
        max_concurrency: int = 8,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.token = token
        self.branch = branch
        self.timeout = timeout
        self.max_concurrency = max_concurrency
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._http = httpx.AsyncClient(
            headers=self._headers(),
            timeout=httpx.Timeout(timeout, connect=10.0),
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: WegoConfig, transport: httpx.AsyncBaseTransport | None = None) -> "RemoteClient":
        """Build a client from a ``WegoConfig``."""
        return cls(
            token=config.github_api_token,
            branch=config.target_branch,
            timeout=config.timeout,
            max_concurrency=config.max_concurrency,
            transport=transport,
        )

    async def __aenter__(self) -> "RemoteClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        """Return the fixed request headers.

        ``Authorization`` is left out when no token is configured so public
        repositories can be read anonymously.
        """
        headers = {
            "User-Agent": USER_AGENT,
            "Accept": "application/vnd.github+json",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_json(self, url: str) -> Any:
        """GET *url* with ``ref=<branch>`` and return the decoded JSON body."""
        async with self._semaphore:
            try:
                response = await self._http.get(url, params={"ref": self.branch})
            except httpx.TimeoutException as exc:
                raise TransportError(url, f"timed out after {self.timeout}s") from exc
            except httpx.TransportError as exc:
                raise TransportError(url, str(exc) or type(exc).__name__) from exc

        if response.status_code != 200:
            raise RemoteError(response.status_code, url, _error_message(response))

        try:
            return response.json()
        except ValueError as exc:
            raise DecodeError(f"Response from {url} is not valid JSON: {exc}") from exc

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_directory(self, url: str) -> list[RemoteDirEntry]:
        """Fetch a remote directory listing.

        Raises:
            TransportError: The request never got a response.
            RemoteError: The API answered with a non-200 status.
            DecodeError: The body is not a directory listing (for example a
                single file object).
        """
        data = await self._get_json(url)
        if not isinstance(data, list):
            raise DecodeError(f"Expected a directory listing from {url}, got {type(data).__name__}")
        try:
            return _DIR_LISTING.validate_python(data)
        except ValidationError as exc:
            raise DecodeError(f"Invalid directory listing from {url}: {exc}") from exc

    async def fetch_content(self, url: str) -> RemoteContent:
        """Fetch one file's metadata and base64 body.

        Raises:
            TransportError, RemoteError, DecodeError: As for ``fetch_directory``.
        """
        data = await self._get_json(url)
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a file object from {url}, got {type(data).__name__}")
        try:
            return RemoteContent.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"Invalid file content from {url}: {exc}") from exc

    async def fetch_manifest(self, url: str) -> RemoteManifest:
        """Fetch and parse the remote ``wego.yaml`` manifest.

        Raises:
            EncodingError: The body is not base64 encoded UTF-8.
            DecodeError: The YAML does not match the manifest shape.
        """
        content = await self.fetch_content(url)
        return RemoteManifest.from_yaml(decode_text(content))


def _error_message(response: httpx.Response) -> str:
    """Pull the ``message`` field out of a GitHub error body, if any."""
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict):
        return str(data.get("message", ""))
    return ""
