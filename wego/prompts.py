"""Interactive prompts built on ``rich.prompt``."""

from __future__ import annotations

from rich.markup import escape
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

from wego.config import DEFAULT_TARGET_BRANCH, DEFAULT_TEMPLATES_SOURCE
from wego.models import RemoteManifest, TemplateKind
from wego.utils import console


def select_template(manifest: RemoteManifest, kind: TemplateKind) -> str | None:
    """Show the manifest entries of *kind* and return the chosen name.

    Returns ``None`` when there is nothing to choose from.
    """
    entries = manifest.entries_for(kind)
    if not entries:
        console.print(f"[yellow]No {kind.remote_segment} declared in the remote wego.yaml.[/yellow]")
        return None

    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", no_wrap=True)
    table.add_column("Template")
    for index, line in enumerate(manifest.describe(kind), start=1):
        table.add_row(str(index), escape(line))
    console.print(table)

    choices = [str(i) for i in range(1, len(entries) + 1)]
    index = IntPrompt.ask(
        f"Select a {kind.value}", choices=choices, default=1, show_choices=False, console=console
    )
    return entries[index - 1].name


def ask_output_name(default: str) -> str:
    """Ask for a custom local name, falling back to *default* when blank."""
    answer = Prompt.ask("Custom file name(Not required)", default="", show_default=False, console=console)
    return answer.strip() or default


def ask_config_values() -> dict[str, str]:
    """Collect the values written by ``wego init``."""
    github_name = Prompt.ask("Github Name", console=console)
    repo_name = Prompt.ask("Repo Name", console=console)
    token = Prompt.ask("Github Api Token", default="", show_default=False, password=True, console=console)
    templates_source = Prompt.ask(
        f"Templates source remote dir path(Default: {DEFAULT_TEMPLATES_SOURCE})",
        default=DEFAULT_TEMPLATES_SOURCE,
        show_default=False,
        console=console,
    )
    target_branch = Prompt.ask(
        "Template repo target branch", default=DEFAULT_TARGET_BRANCH, console=console
    )
    return {
        "github_name": github_name.strip(),
        "repo_name": repo_name.strip(),
        "github_api_token": token.strip(),
        "templates_source": templates_source.strip(),
        "target_branch": target_branch.strip(),
    }
