"""Template installation flows for pages, components and projects.

The installer ties the pieces together: it loads the remote manifest, plans
local and remote paths, skips targets that already exist, resolves component
dependencies and hands each remote listing to the ``TreeMaterializer``.
"""

from __future__ import annotations

import asyncio
import time
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel
from rich.markup import escape

from wego.client import RemoteClient
from wego.config import WegoConfig
from wego.errors import WegoError
from wego.materializer import MaterializeReport, TreeMaterializer
from wego.models import ManifestEntry, RemoteManifest, TemplateKind
from wego.planner import plan_local_path, plan_manifest_url, plan_remote_url
from wego.prompts import ask_output_name, select_template
from wego.resolver import find_missing, resolve_closure
from wego.utils import console, elapsed_ms, print_error, print_warning


class InstallStatus(str, Enum):
    INSTALLED = "installed"
    SKIPPED = "skipped"
    FAILED = "failed"


class InstallResult(BaseModel):
    """Outcome of installing one template directory."""

    name: str
    kind: TemplateKind
    local_path: Path
    status: InstallStatus
    report: Optional[MaterializeReport] = None
    error: Optional[str] = None


class TemplateInstaller:
    """Installs templates from the configured repository into *root*.

    Attributes:
        config: The configuration for this invocation.
        client: Shared contents API client.
        root: Local directory that plays the role of the working directory.
    """

    def __init__(self, config: WegoConfig, client: RemoteClient, root: str | Path | None = None) -> None:
        self.config = config
        self.client = client
        self.root = Path(root) if root is not None else Path.cwd()
        self.materializer = TreeMaterializer(client)

    # ------------------------------------------------------------------
    # Manifest
    # ------------------------------------------------------------------

    async def load_manifest(self) -> RemoteManifest:
        """Fetch the remote manifest.

        Raises:
            WegoError: Naming the manifest URL, chained to the client error.
        """
        url = plan_manifest_url(self.config)
        try:
            return await self.client.fetch_manifest(url)
        except WegoError as exc:
            raise WegoError(
                f"There is no wego.yaml in your repo! "
                f"Request url: {url}?ref={self.config.target_branch}\n{exc}"
            ) from exc

    # ------------------------------------------------------------------
    # Single directory installs
    # ------------------------------------------------------------------

    async def install(
        self,
        kind: TemplateKind,
        name: str,
        output_name: str | None = None,
        report_time: bool = True,
    ) -> InstallResult:
        """Install one template directory.

        An existing local target is skipped without issuing any request.
        """
        local_path = plan_local_path(kind, output_name or name, self.root)
        if local_path.exists():
            print_warning(f"{local_path} is already existed!")
            return InstallResult(
                name=name, kind=kind, local_path=local_path, status=InstallStatus.SKIPPED
            )

        url = plan_remote_url(self.config, kind, name)
        try:
            listing = await self.client.fetch_directory(url)
        except WegoError as exc:
            print_error(f"Error: request templates failure! {url}")
            print_error(str(exc))
            return InstallResult(
                name=name, kind=kind, local_path=local_path,
                status=InstallStatus.FAILED, error=str(exc),
            )

        if not listing:
            message = f"Template {name} is empty: {url}"
            print_error(message)
            return InstallResult(
                name=name, kind=kind, local_path=local_path,
                status=InstallStatus.FAILED, error=message,
            )

        started = time.monotonic()
        report = await self.materializer.materialize(listing, local_path)
        if report_time:
            console.print(f"Done in {elapsed_ms(started)} ms!")
        return InstallResult(
            name=name, kind=kind, local_path=local_path,
            status=InstallStatus.INSTALLED, report=report,
        )

    async def install_components(
        self, names: list[str], renames: dict[str, str] | None = None
    ) -> list[InstallResult]:
        """Install several components concurrently, each checked for existence.

        Local paths are claimed in *names* order before anything is
        dispatched, so a later name planning to an already claimed directory
        is skipped instead of merging into it.
        """
        if not names:
            return []
        renames = renames or {}
        started = time.monotonic()

        claimed: set[Path] = set()
        skipped: dict[int, InstallResult] = {}
        pending = []
        for index, name in enumerate(names):
            output_name = renames.get(name)
            local_path = plan_local_path(TemplateKind.COMPONENT, output_name or name, self.root)
            if local_path in claimed:
                print_warning(f"{local_path} is already existed!")
                skipped[index] = InstallResult(
                    name=name, kind=TemplateKind.COMPONENT, local_path=local_path,
                    status=InstallStatus.SKIPPED,
                )
                continue
            claimed.add(local_path)
            pending.append(self.install(TemplateKind.COMPONENT, name, output_name, report_time=False))

        installed = iter(await asyncio.gather(*pending))
        console.print(f"Done in {elapsed_ms(started)} ms!")
        return [skipped[i] if i in skipped else next(installed) for i in range(len(names))]

    # ------------------------------------------------------------------
    # Flows per template kind
    # ------------------------------------------------------------------

    def _warn_missing(self, names: list[str], manifest: RemoteManifest) -> None:
        missing = find_missing(names, manifest.components)
        if missing:
            print_warning(f"Not declared in wego.yaml components: {', '.join(missing)}")

    async def install_page(
        self, manifest: RemoteManifest, name: str, output_name: str | None = None
    ) -> list[InstallResult]:
        """Install a page, then the closure of its component dependencies."""
        results = [await self.install(TemplateKind.PAGE, name, output_name)]

        entry = manifest.find(TemplateKind.PAGE, name)
        deps = entry.dependencies if isinstance(entry, ManifestEntry) else []
        if deps:
            console.print(f"[green]Start loading dependencies ---->[/green] {escape(str(deps))}")
            closure = resolve_closure(deps, manifest.components)
            self._warn_missing(closure, manifest)
            results.extend(await self.install_components(closure))
        return results

    async def install_component(
        self, manifest: RemoteManifest, name: str, output_name: str | None = None
    ) -> list[InstallResult]:
        """Install a component together with its dependency closure."""
        entry = manifest.find(TemplateKind.COMPONENT, name)
        deps = entry.dependencies if isinstance(entry, ManifestEntry) else []
        closure = resolve_closure([name, *deps], manifest.components)
        if deps:
            console.print(f"[green]Start loading dependencies ---->[/green] {escape(str(deps))}")
        self._warn_missing(closure, manifest)
        renames = {name: output_name} if output_name and output_name != name else None
        return await self.install_components(closure, renames)

    async def install_project(
        self, manifest: RemoteManifest, name: str, output_name: str | None = None
    ) -> list[InstallResult]:
        """Install a project. Projects have no dependencies."""
        return [await self.install(TemplateKind.PROJECT, name, output_name)]

    async def run(
        self,
        kind: TemplateKind,
        name: str | None = None,
        output_name: str | None = None,
        interactive: bool = True,
    ) -> list[InstallResult]:
        """Load the manifest, pick a template and install it.

        Without *name* the user picks one interactively; with *interactive*
        the user may also choose a custom output name.

        Raises:
            WegoError: If the manifest cannot be loaded or *name* is not
                declared in it.
        """
        manifest = await self.load_manifest()

        if name is None:
            name = select_template(manifest, kind)
            if name is None:
                return []
        elif manifest.find(kind, name) is None:
            message = f"{name} is not a {kind.value} declared in the remote wego.yaml"
            raise WegoError(message)

        if output_name is None and interactive:
            output_name = ask_output_name(name)

        if kind is TemplateKind.PAGE:
            return await self.install_page(manifest, name, output_name)
        if kind is TemplateKind.COMPONENT:
            return await self.install_component(manifest, name, output_name)
        return await self.install_project(manifest, name, output_name)
