"""Pydantic v2 models for the remote manifest and the GitHub contents API.

The manifest (``wego.yaml`` at the root of the templates repository) lists
the installable pages, components and projects. Directory listings and file
contents come from ``GET /repos/{owner}/{repo}/contents/{path}``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wego.errors import DecodeError


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class TemplateKind(str, Enum):
    """Logical template type. Determines local and remote path segments."""
    PAGE = "page"
    COMPONENT = "component"
    PROJECT = "project"

    @property
    def remote_segment(self) -> str:
        """Directory name under the templates source, e.g. ``components``."""
        return f"{self.value}s"


class EntryType(str, Enum):
    """Node type reported by the contents API."""
    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"


# ---------------------------------------------------------------------------
# Manifest models
# ---------------------------------------------------------------------------

class ManifestEntry(BaseModel):
    """One installable page or component."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Template directory name")
    description: str = Field(default="", description="Human-readable summary")
    dependencies: list[str] = Field(
        default_factory=list, description="Names of components this entry needs"
    )

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("dependencies", mode="before")
    @classmethod
    def _none_dependencies(cls, value: Any) -> Any:
        return [] if value is None else value


class ProjectEntry(BaseModel):
    """One installable project. Projects carry no dependencies."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Template directory name")
    description: str = Field(default="", description="Human-readable summary")

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value


class RemoteManifest(BaseModel):
    """The parsed remote ``wego.yaml``."""
    model_config = ConfigDict(frozen=True)

    components: list[ManifestEntry] = Field(default_factory=list)
    pages: list[ManifestEntry] = Field(default_factory=list)
    projects: list[ProjectEntry] = Field(default_factory=list)

    @field_validator("components", "pages", "projects", mode="before")
    @classmethod
    def _none_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_yaml(cls, text: str) -> "RemoteManifest":
        """Parse manifest YAML text.

        Raises:
            DecodeError: If the text is not YAML or does not match the
                manifest shape.
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DecodeError(f"Invalid manifest YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise DecodeError("Invalid manifest: expected a mapping at the top level")
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise DecodeError(f"Invalid manifest: {exc}") from exc

    def entries_for(self, kind: TemplateKind) -> list[ManifestEntry] | list[ProjectEntry]:
        """Return the entry list for *kind*."""
        if kind is TemplateKind.PAGE:
            return self.pages
        if kind is TemplateKind.COMPONENT:
            return self.components
        return self.projects

    def find(self, kind: TemplateKind, name: str) -> ManifestEntry | ProjectEntry | None:
        """Return the first entry of *kind* named *name*, or ``None``."""
        for entry in self.entries_for(kind):
            if entry.name == name:
                return entry
        return None

    def describe(self, kind: TemplateKind) -> list[str]:
        """Return one display line per entry, as shown in the selection menu."""
        lines: list[str] = []
        for entry in self.entries_for(kind):
            if isinstance(entry, ManifestEntry):
                deps = ", ".join(f'"{d}"' for d in entry.dependencies)
                lines.append(f"{entry.name} ----> {entry.description} ----> [{deps}]")
            else:
                lines.append(f"{entry.name} ----> {entry.description}")
        return lines


# ---------------------------------------------------------------------------
# Contents API models
# ---------------------------------------------------------------------------

class Links(BaseModel):
    """The ``_links`` block attached to every contents API node."""
    model_config = ConfigDict(populate_by_name=True)

    self_url: Optional[str] = Field(default=None, alias="self")
    git: Optional[str] = None
    html: Optional[str] = None


class RemoteDirEntry(BaseModel):
    """One node of a remote directory listing."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    url: str
    file_type: EntryType = Field(..., alias="type")
    sha: str = ""
    size: int = 0
    html_url: Optional[str] = None
    git_url: Optional[str] = None
    download_url: Optional[str] = None
    links: Optional[Links] = Field(default=None, alias="_links")

    @property
    def is_dir(self) -> bool:
        return self.file_type is EntryType.DIR


class RemoteContent(BaseModel):
    """One fetched file: metadata plus its base64 encoded body."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    path: str
    content: str
    encoding: str = "base64"
    sha: str = ""
    size: int = 0
    url: Optional[str] = None
    html_url: Optional[str] = None
    git_url: Optional[str] = None
    download_url: Optional[str] = None
    file_type: EntryType = Field(default=EntryType.FILE, alias="type")
    links: Optional[Links] = Field(default=None, alias="_links")
