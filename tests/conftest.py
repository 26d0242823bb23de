"""Shared pytest fixtures for the wego test suite.

Provides reusable fixtures for:
- A typed ``WegoConfig`` pointing at a fake repository
- An in-memory GitHub contents API served through ``httpx.MockTransport``
- A sample remote manifest
- A working directory isolated under ``tmp_path``
"""

from __future__ import annotations

import asyncio
import base64
import textwrap
from pathlib import Path
from typing import Any

import httpx
import pytest

from wego.client import RemoteClient
from wego.config import WegoConfig

API_HOST = "https://api.github.com"
OWNER = "acme"
REPO = "templates-repo"
CONTENTS_PREFIX = f"/repos/{OWNER}/{REPO}/contents/"
CONTENTS_URL = f"{API_HOST}{CONTENTS_PREFIX}"


# ---------------------------------------------------------------------------
# Fake contents API
# ---------------------------------------------------------------------------

def encode_github_base64(data: bytes) -> str:
    """Encode like the contents API does: base64 wrapped at 60 columns."""
    encoded = base64.b64encode(data).decode("ascii")
    return "\n".join(encoded[i:i + 60] for i in range(0, len(encoded), 60)) + "\n"


class FakeContentsAPI:
    """In-memory stand-in for ``GET /repos/{owner}/{repo}/contents/{path}``.

    Directories are implied by the file paths. Every request is recorded, and
    the peak number of concurrent requests is tracked.

    Attributes:
        files: Mapping of repository path to raw file bytes.
        errors: Mapping of repository path to an HTTP status to return instead.
        raw_bodies: Mapping of repository path to a literal JSON body to return.
        requests: Every request received, in arrival order.
    """

    def __init__(self, files: dict[str, str | bytes] | None = None, delay: float = 0.0) -> None:
        self.files: dict[str, bytes] = {}
        for path, data in (files or {}).items():
            self.add_file(path, data)
        self.errors: dict[str, int] = {}
        self.raw_bodies: dict[str, Any] = {}
        self.requests: list[httpx.Request] = []
        self.delay = delay
        self.in_flight = 0
        self.max_in_flight = 0

    def add_file(self, path: str, data: str | bytes) -> None:
        self.files[path] = data.encode("utf-8") if isinstance(data, str) else data

    @property
    def requested_paths(self) -> list[str]:
        return [self._repo_path(r) for r in self.requests]

    @staticmethod
    def _repo_path(request: httpx.Request) -> str:
        return request.url.path[len(CONTENTS_PREFIX):].strip("/")

    def _is_dir(self, path: str) -> bool:
        return any(p.startswith(path + "/") for p in self.files)

    def _node(self, path: str, is_dir: bool) -> dict[str, Any]:
        name = path.rsplit("/", 1)[-1]
        return {
            "name": name,
            "path": path,
            "sha": f"sha-{path}",
            "size": 0 if is_dir else len(self.files[path]),
            "url": f"{CONTENTS_URL}{path}?ref=main",
            "html_url": f"https://github.com/{OWNER}/{REPO}/{'tree' if is_dir else 'blob'}/main/{path}",
            "git_url": f"{API_HOST}/repos/{OWNER}/{REPO}/git/blobs/sha-{path}",
            "download_url": None if is_dir else f"https://raw.githubusercontent.com/{OWNER}/{REPO}/main/{path}",
            "type": "dir" if is_dir else "file",
            "_links": {
                "self": f"{CONTENTS_URL}{path}?ref=main",
                "git": f"{API_HOST}/repos/{OWNER}/{REPO}/git/blobs/sha-{path}",
                "html": f"https://github.com/{OWNER}/{REPO}/blob/main/{path}",
            },
        }

    def _listing(self, path: str) -> list[dict[str, Any]]:
        children: dict[str, bool] = {}
        prefix = path + "/"
        for file_path in self.files:
            if not file_path.startswith(prefix):
                continue
            head = file_path[len(prefix):].split("/", 1)[0]
            children[head] = children.get(head, False) or "/" in file_path[len(prefix):]
        return [self._node(prefix + name, is_dir) for name, is_dir in sorted(children.items())]

    def _content(self, path: str) -> dict[str, Any]:
        node = self._node(path, is_dir=False)
        node["content"] = encode_github_base64(self.files[path])
        node["encoding"] = "base64"
        return node

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            path = self._repo_path(request)
            if path in self.errors:
                return httpx.Response(self.errors[path], json={"message": "Forced error"})
            if path in self.raw_bodies:
                return httpx.Response(200, json=self.raw_bodies[path])
            if path in self.files:
                return httpx.Response(200, json=self._content(path))
            if self._is_dir(path):
                return httpx.Response(200, json=self._listing(path))
            return httpx.Response(404, json={"message": "Not Found"})
        finally:
            self.in_flight -= 1

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def client(self, config: WegoConfig) -> RemoteClient:
        return RemoteClient.from_config(config, transport=self.transport())


# ---------------------------------------------------------------------------
# Config & manifest
# ---------------------------------------------------------------------------

SAMPLE_MANIFEST = textwrap.dedent(
    """\
    components:
      - name: Button
        description: A plain button
        dependencies: [Icon]
      - name: Icon
        description: SVG icon wrapper
        dependencies: []
      - name: Modal
        description: Dialog with backdrop
        dependencies: [Button, Portal]
      - name: Portal
        description: Renders children elsewhere
    pages:
      - name: Login
        description: Login page
        dependencies: [Modal]
      - name: About
        description: Static about page
        dependencies:
    projects:
      - name: Starter
        description: Vite + React starter
    """
)


@pytest.fixture
def config() -> WegoConfig:
    """Config for the fake ``acme/templates-repo`` repository."""
    return WegoConfig(github_name=OWNER, repo_name=REPO, github_api_token="test-token")


@pytest.fixture
def fake_api() -> FakeContentsAPI:
    """Fake contents API holding the sample manifest and a few templates."""
    return FakeContentsAPI(
        {
            "wego.yaml": SAMPLE_MANIFEST,
            "templates/components/Button/index.tsx": "export const Button = () => null;\n",
            "templates/components/Button/README.md": "# Button\n",
            "templates/components/Icon/index.tsx": "export const Icon = () => null;\n",
            "templates/components/Modal/index.tsx": "export const Modal = () => null;\n",
            "templates/components/Modal/styles/modal.css": ".modal { display: none; }\n",
            "templates/components/Portal/index.tsx": "export const Portal = () => null;\n",
            "templates/pages/Login/index.tsx": "export default function Login() {}\n",
            "templates/pages/Login/assets/logo.png": b"\x89PNG\r\n\x1a\n\x00\x01binary",
            "templates/pages/About/index.tsx": "export default function About() {}\n",
            "templates/projects/Starter/package.json": '{"name": "starter"}\n',
            "templates/projects/Starter/src/main.tsx": "console.log('hi');\n",
            "templates/projects/Starter/src/app/App.tsx": "export const App = () => null;\n",
        }
    )


@pytest.fixture
def work_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary working directory made the process cwd for the test."""
    root = tmp_path / "app"
    root.mkdir()
    monkeypatch.chdir(root)
    return root


@pytest.fixture
def sample_manifest_text() -> str:
    """Raw YAML of the sample remote manifest."""
    return SAMPLE_MANIFEST


@pytest.fixture
def make_api():
    """Factory for a ``FakeContentsAPI`` with custom files.

    Usage:
        def test_something(make_api, config):
            api = make_api({"templates/components/A/x.txt": "x"})
            async with api.client(config) as client:
                ...
    """
    return FakeContentsAPI
