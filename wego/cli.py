"""wego command line interface.

Usage::

    wego init                # answer prompts, write ./wego.yaml
    wego init -y             # write a wego.yaml skeleton to fill in by hand
    wego list component      # show the templates declared in the remote wego.yaml
    wego page                # pick a page interactively and install it
    wego component --name Button --output MyButton
"""

from __future__ import annotations

import argparse
import asyncio
import sys
import time

from wego.client import RemoteClient
from wego.config import CONFIG_FILE_NAME, WegoConfig, write_config_file
from wego.errors import ConfigError, WegoError
from wego.installer import InstallResult, InstallStatus, TemplateInstaller
from wego.models import TemplateKind
from wego.planner import plan_manifest_url
from wego.prompts import ask_config_values
from wego.utils import console, format_duration, print_error, print_success, print_summary_table


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wego",
        description="wego -- fetch page, component and project templates from a GitHub repo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  wego init\n"
            "  wego page\n"
            "  wego component --name Button --output MyButton\n"
        ),
    )
    parser.add_argument(
        "--config", "-c",
        default=CONFIG_FILE_NAME,
        help=f"Path to the local config file (default: ./{CONFIG_FILE_NAME})",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help=f"Create a local {CONFIG_FILE_NAME}")
    init.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Skip the prompts and write a skeleton to edit by hand",
    )
    init.add_argument("--force", action="store_true", help="Overwrite an existing file")

    listing = sub.add_parser("list", help="List the templates declared in the remote wego.yaml")
    listing.add_argument("kind", choices=[k.value for k in TemplateKind])

    for kind in TemplateKind:
        cmd = sub.add_parser(kind.value, help=f"Install a {kind.value} template")
        cmd.add_argument("--name", "-n", default=None, help="Template name (prompted if omitted)")
        cmd.add_argument("--output", "-o", default=None, help="Custom local directory name")
        cmd.add_argument(
            "--no-input",
            action="store_true",
            help="Do not prompt for a custom name",
        )

    return parser


def _init(args: argparse.Namespace) -> int:
    values = {} if args.yes else ask_config_values()
    path = write_config_file(args.config, force=args.force, **values)
    print_success(f"Created {path}")
    return 0


async def _list(config: WegoConfig, kind: TemplateKind) -> int:
    async with RemoteClient.from_config(config) as client:
        manifest = await client.fetch_manifest(plan_manifest_url(config))

    rows = []
    for entry in manifest.entries_for(kind):
        deps = ", ".join(getattr(entry, "dependencies", []))
        rows.append((entry.name, entry.description, deps))
    print_summary_table(rows, ("Name", "Description", "Dependencies"), title=kind.remote_segment)
    return 0


async def _install(config: WegoConfig, kind: TemplateKind, args: argparse.Namespace) -> list[InstallResult]:
    async with RemoteClient.from_config(config) as client:
        installer = TemplateInstaller(config, client)
        return await installer.run(
            kind, name=args.name, output_name=args.output, interactive=not args.no_input
        )


def _print_results(results: list[InstallResult]) -> None:
    if len(results) < 2:
        return
    rows = []
    for result in results:
        failures = len(result.report.failures) if result.report else 0
        rows.append((result.name, result.status.value, str(result.local_path), str(failures)))
    print_summary_table(rows, ("Template", "Status", "Path", "Failed files"), title="Summary")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    args = _build_parser().parse_args(argv)

    try:
        if args.command == "init":
            return _init(args)

        config = WegoConfig.load(args.config).with_env()
        kind = TemplateKind(args.kind if args.command == "list" else args.command)
        if args.command == "list":
            return asyncio.run(_list(config, kind))

        started = time.monotonic()
        results = asyncio.run(_install(config, kind, args))
    except ConfigError as exc:
        print_error(f"Warning: {exc}")
        return 1
    except WegoError as exc:
        print_error(str(exc))
        return 1
    except KeyboardInterrupt:
        console.print("[yellow]Aborted.[/yellow]")
        return 130

    _print_results(results)
    if results:
        console.print(f"[dim]Finished in {format_duration(time.monotonic() - started)}[/dim]")
    if any(r.status is InstallStatus.FAILED for r in results):
        console.print("[yellow]Some templates failed to install, see the messages above.[/yellow]")
    return 0


if __name__ == "__main__":
    sys.exit(main())
