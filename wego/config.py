"""wego configuration.

Typed configuration for a single command invocation. The record is read from
the local ``wego.yaml`` in the working directory, optionally overridden by
environment variables, and then passed explicitly to every component. It is
frozen once built.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from jinja2 import Environment, FileSystemLoader
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from wego.errors import ConfigError

CONFIG_FILE_NAME = "wego.yaml"
MANIFEST_FILE_NAME = "wego.yaml"
DEFAULT_API_PREFIX = "https://api.github.com/repos"
DEFAULT_TARGET_BRANCH = "main"
DEFAULT_TEMPLATES_SOURCE = "templates"

_TEMPLATE_DIR = Path(__file__).parent / "templates"


class WegoConfig(BaseModel):
    """Configuration for one wego command.

    ``github_name`` and ``repo_name`` identify the templates repository; the
    remaining fields fall back to their defaults when absent or ``null`` in
    the YAML file.
    """

    model_config = ConfigDict(frozen=True)

    github_name: str = Field(..., description="GitHub user or organisation owning the templates repo")
    repo_name: str = Field(..., description="Templates repository name")
    github_api_token: str = Field(default="", description="Bearer token; empty for public access")
    target_branch: str = Field(default=DEFAULT_TARGET_BRANCH)
    templates_source: str = Field(
        default=DEFAULT_TEMPLATES_SOURCE, description="Templates dir path inside the repo"
    )
    api_prefix: str = Field(default=DEFAULT_API_PREFIX)
    max_concurrency: int = Field(default=8, ge=1, description="Maximum in-flight HTTP requests")
    timeout: float = Field(default=30.0, ge=1, description="Per-request timeout in seconds")

    @field_validator("github_name", "repo_name", mode="before")
    @classmethod
    def _required(cls, value: Any, info: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(f"{info.field_name} is required!")
        return value

    @field_validator("github_api_token", mode="before")
    @classmethod
    def _empty_token(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("api_prefix", "templates_source", mode="after")
    @classmethod
    def _strip_slashes(cls, value: str) -> str:
        return value.strip("/") if "://" not in value else value.rstrip("/")

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> "WegoConfig":
        """Validate a raw mapping, dropping ``null`` optional values.

        Raises:
            ConfigError: If a required field is missing or a value is invalid.
        """
        cleaned = {
            key: value
            for key, value in data.items()
            if value is not None or key in ("github_name", "repo_name")
        }
        try:
            return cls.model_validate(cleaned)
        except ValidationError as exc:
            messages = []
            for err in exc.errors():
                field = ".".join(str(part) for part in err.get("loc", ()))
                msg = err.get("msg", "")
                if msg.startswith("Value error, "):
                    msg = msg[len("Value error, "):]
                if err.get("type") == "missing":
                    msg = f"{field} is required!"
                messages.append(msg if field in msg else f"{field}: {msg}")
            raise ConfigError("; ".join(messages)) from exc

    @classmethod
    def load(cls, path: str | Path | None = None) -> "WegoConfig":
        """Load ``wego.yaml`` from *path* (default: the working directory).

        Raises:
            ConfigError: If the file is missing, is not YAML, or fails
                validation.
        """
        config_path = Path(path) if path else Path.cwd() / CONFIG_FILE_NAME
        if not config_path.is_file():
            raise ConfigError(
                f"Need a {CONFIG_FILE_NAME}, you can use command wego init to generate the file."
            )
        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid yaml file {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"invalid yaml file {config_path}: expected a mapping")
        return cls.from_mapping(data)

    def with_env(self, environ: dict[str, str] | None = None) -> "WegoConfig":
        """Return a copy with environment overrides applied.

        Recognised variables (all optional):
            WEGO_GITHUB_API_TOKEN, WEGO_TARGET_BRANCH, WEGO_TEMPLATES_SOURCE,
            WEGO_API_PREFIX, WEGO_MAX_CONCURRENCY, WEGO_TIMEOUT.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}
        if env.get("WEGO_GITHUB_API_TOKEN"):
            overrides["github_api_token"] = env["WEGO_GITHUB_API_TOKEN"]
        if env.get("WEGO_TARGET_BRANCH"):
            overrides["target_branch"] = env["WEGO_TARGET_BRANCH"]
        if env.get("WEGO_TEMPLATES_SOURCE"):
            overrides["templates_source"] = env["WEGO_TEMPLATES_SOURCE"]
        if env.get("WEGO_API_PREFIX"):
            overrides["api_prefix"] = env["WEGO_API_PREFIX"]
        try:
            if env.get("WEGO_MAX_CONCURRENCY"):
                overrides["max_concurrency"] = int(env["WEGO_MAX_CONCURRENCY"])
            if env.get("WEGO_TIMEOUT"):
                overrides["timeout"] = float(env["WEGO_TIMEOUT"])
        except ValueError as exc:
            raise ConfigError(f"Invalid numeric environment override: {exc}") from exc
        if not overrides:
            return self
        return self.from_mapping({**self.model_dump(), **overrides})


# ---------------------------------------------------------------------------
# Config file generation
# ---------------------------------------------------------------------------


def render_config_file(
    github_name: str = "",
    repo_name: str = "",
    github_api_token: str = "",
    templates_source: str = DEFAULT_TEMPLATES_SOURCE,
    target_branch: str = DEFAULT_TARGET_BRANCH,
) -> str:
    """Render the ``wego.yaml`` file contents from the packaged template.

    Empty values render as commented-out keys so the file stays valid YAML
    and the defaults apply.
    """
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    template = env.get_template(f"{CONFIG_FILE_NAME}.j2")
    return template.render(
        github_name=github_name,
        repo_name=repo_name,
        github_api_token=github_api_token,
        templates_source=templates_source or DEFAULT_TEMPLATES_SOURCE,
        target_branch=target_branch or DEFAULT_TARGET_BRANCH,
    )


def write_config_file(path: str | Path | None = None, force: bool = False, **values: str) -> Path:
    """Write a rendered ``wego.yaml`` and return its path.

    Raises:
        ConfigError: If the file already exists and *force* is not set.
    """
    target = Path(path) if path else Path.cwd() / CONFIG_FILE_NAME
    if target.exists() and not force:
        raise ConfigError(f"{target} already exists, pass --force to overwrite it.")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(render_config_file(**values), encoding="utf-8")
    return target
