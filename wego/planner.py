"""Local and remote path planning for templates."""

from __future__ import annotations

from pathlib import Path

from wego.config import MANIFEST_FILE_NAME, WegoConfig
from wego.models import TemplateKind

LOCAL_SUBTREES: dict[TemplateKind, tuple[str, ...]] = {
    TemplateKind.PAGE: ("src", "pages"),
    TemplateKind.COMPONENT: ("src", "components"),
    TemplateKind.PROJECT: (),
}


def plan_local_path(kind: TemplateKind, name: str, root: str | Path | None = None) -> Path:
    """Return where a template of *kind* named *name* is written.

    ``page`` and ``component`` land under ``src/pages`` and
    ``src/components``; a ``project`` lands directly in *root*. *root*
    defaults to the current working directory.
    """
    base = Path(root) if root is not None else Path.cwd()
    return base.joinpath(*LOCAL_SUBTREES[kind], name)


def _repo_contents_url(config: WegoConfig) -> str:
    return "/".join([config.api_prefix, config.github_name, config.repo_name, "contents"])


def plan_remote_url(config: WegoConfig, kind: TemplateKind, name: str) -> str:
    """Return the contents API URL for the template directory."""
    return "/".join(
        [_repo_contents_url(config), config.templates_source, kind.remote_segment, name]
    )


def plan_manifest_url(config: WegoConfig) -> str:
    """Return the contents API URL for the remote manifest file."""
    return f"{_repo_contents_url(config)}/{MANIFEST_FILE_NAME}"
