#!/usr/bin/env python3
"""CLI entry point for the Wildermyth workspace tool."""

import argparse
import logging
import re
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from . import GAME_NAME, TOOL_NAME, __version__
from .core.platform import PlatformResolver, ResolutionError
from .core.resources import Resource
from .core.synchronizer import WorkspaceSynchronizer, SyncError
from .core.write_rules import ShouldOverwriteWriteRule
from .models.config import (
    ConfigError,
    SyncOptions,
    UserConfig,
    WorkspaceConfig,
    effective_platform,
)
from .models.dependencies import Placement, plugin_dependencies, project_dependencies

console = Console()
logger = logging.getLogger(__name__)

# (resource name, file name in the project)
PROJECT_TEMPLATES = [
    ("wilderworkspace.yaml", "wilderworkspace.yaml"),
    ("gitignore", ".gitignore"),
]


def configure_logging(verbosity: int) -> None:
    """Route log records through rich. -v shows info, -vv shows every file."""
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def get_project_dir(args: argparse.Namespace) -> Path:
    """Get the project directory (defaults to the current directory)."""
    return Path(args.project_dir or Path.cwd()).absolute()


def load_configs(args: argparse.Namespace) -> tuple[UserConfig, WorkspaceConfig]:
    user = UserConfig.load(Path(args.user_config) if args.user_config else None)
    workspace = WorkspaceConfig.load(get_project_dir(args))
    return user, workspace


def cmd_sync(args: argparse.Namespace) -> int:
    """Copy game files into the workspace."""
    try:
        user, workspace = load_configs(args)
    except (ConfigError, OSError) as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    platform = effective_platform(user, workspace, args.platform)
    options = SyncOptions.from_config(
        workspace,
        dest_dir=args.dest,
        patchline=args.patchline,
        overwrite=args.overwrite,
    )

    console.print(f"\n[bold blue]Copying {GAME_NAME} files:[/bold blue] {platform} -> {options.dest_root}")
    if options.overwrite:
        console.print("[yellow]Existing files in the workspace will be overwritten[/yellow]")

    try:
        rules = [ShouldOverwriteWriteRule(True, pattern) for pattern in args.refresh or []]
    except re.error as e:
        console.print(f"[red]Invalid --refresh pattern: {e}")
        return 1

    synchronizer = WorkspaceSynchronizer(PlatformResolver(), rules=rules)
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            progress.add_task(description=f"Copying {GAME_NAME}...", total=None)
            report = synchronizer.sync_platform(platform, options)
    except SyncError as e:
        logger.debug("Synchronization failed", exc_info=e)
        console.print(f"[red]Failed to copy game files: {e.cause}")
        return 1

    if report.excluded:
        console.print(f"[dim]Excluded: {', '.join(report.excluded)}[/dim]")
    console.print(f"[green]Wrote {report.marker_path}[/green]")
    console.print(f"\n[bold]Summary:[/bold] {report.summary()}")
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    """Show where the game installation would be copied from."""
    try:
        user, workspace = load_configs(args)
    except (ConfigError, OSError) as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    identifier = effective_platform(user, workspace, args.platform)
    try:
        source = PlatformResolver().resolve(identifier)
    except ResolutionError as e:
        console.print(f"[red]{e}")
        return 1

    kind = f"default {source.platform.value} install" if source.is_default_install else "custom path"
    console.print(f"[bold]Platform:[/bold] {identifier} ({kind})")
    console.print(f"[bold]Install Directory:[/bold] {source.path}")
    if source.path.is_dir():
        console.print("[green]Directory exists")
    else:
        console.print("[yellow]Directory not found")
    return 0


def cmd_deps(args: argparse.Namespace) -> int:
    """List the dependencies of a workspace."""
    if args.plugin:
        deps = plugin_dependencies()
        title = f"{TOOL_NAME} Dependencies"
    else:
        placement = Placement(args.placement) if args.placement else None
        deps = project_dependencies(placement)
        title = "Project Dependencies"

    if not deps:
        console.print("[yellow]No dependencies found")
        return 0

    table = Table(title=title)
    table.add_column("Name", style="cyan")
    table.add_column("Coordinates", style="green")
    table.add_column("Placement", style="blue")
    table.add_column("Repository")

    for dep in deps:
        table.add_row(
            dep.name,
            dep.notation,
            dep.placement.value if dep.placement else "[dim]-",
            dep.repo or "[dim]-",
        )

    console.print(table)
    return 0


def cmd_config(args: argparse.Namespace) -> int:
    """Show the effective configuration."""
    try:
        user, workspace = load_configs(args)
    except (ConfigError, OSError) as e:
        console.print(f"[red]Configuration error: {e}")
        return 1

    options = SyncOptions.from_config(workspace)

    console.print(f"\n[bold]User Config:[/bold] {user.path}")
    console.print(f"[bold]Project:[/bold] {workspace.name} {workspace.version}")
    console.print(f"[bold]Project Directory:[/bold] {workspace.project_dir}")
    console.print(f"[bold]Platform:[/bold] {effective_platform(user, workspace)}")
    console.print(f"[bold]Destination:[/bold] {options.dest_root}")
    console.print(f"[bold]Decomp Directory:[/bold] {options.decomp_dir}")
    console.print(f"[bold]Patchline:[/bold] {options.patchline}")
    console.print(f"[bold]Overwrite:[/bold] {'Yes' if options.overwrite else 'No'}")
    return 0


def cmd_init(args: argparse.Namespace) -> int:
    """Write the project templates into the project directory."""
    project_dir = get_project_dir(args)
    project_dir.mkdir(parents=True, exist_ok=True)

    for resource_name, dest_name in PROJECT_TEMPLATES:
        resource = Resource(resource_name, dest_name)
        if resource.write(project_dir):
            console.print(f"[green]Created:[/green] {project_dir / dest_name}")
        else:
            console.print(f"[dim]Already exists: {project_dir / dest_name}[/dim]")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wilderworkspace",
        description=f"Set up a local {GAME_NAME} modding workspace",
    )
    parser.add_argument("--version", action="version", version=f"{TOOL_NAME} {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More output (-vv for every file)")
    parser.add_argument("--project-dir", help="Project directory (default: current directory)")
    parser.add_argument(
        "--user-config",
        help="User config file (default: ~/.wilderWorkspace/config.properties)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # sync command
    sync_parser = subparsers.add_parser("sync", help=f"Copy {GAME_NAME} files into the workspace")
    sync_parser.add_argument("--platform", help="steam, epic, itch, gog, or a path to the game")
    sync_parser.add_argument("--dest", help="Destination directory (default: ./bin)")
    sync_parser.add_argument("--patchline", help="Label written to patchline.txt")
    sync_parser.add_argument(
        "--overwrite",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Replace files that already exist in the destination (default: from wilderworkspace.yaml)",
    )
    sync_parser.add_argument(
        "--refresh",
        action="append",
        metavar="REGEX",
        help="Always replace files whose workspace-relative path matches REGEX (repeatable)",
    )

    # resolve command
    resolve_parser = subparsers.add_parser("resolve", help="Show the game install directory")
    resolve_parser.add_argument("platform", nargs="?", help="Platform name or path")

    # deps command
    deps_parser = subparsers.add_parser("deps", help="List workspace dependencies")
    deps_parser.add_argument(
        "--placement",
        choices=[p.value for p in Placement],
        help="Only show dependencies with this placement",
    )
    deps_parser.add_argument("--plugin", action="store_true", help=f"Show {TOOL_NAME}'s own dependencies")

    # config command
    subparsers.add_parser("config", help="Show the effective configuration")

    # init command
    subparsers.add_parser("init", help="Create wilderworkspace.yaml and .gitignore")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.command == "sync":
        return cmd_sync(args)
    elif args.command == "resolve":
        return cmd_resolve(args)
    elif args.command == "deps":
        return cmd_deps(args)
    elif args.command == "config":
        return cmd_config(args)
    elif args.command == "init":
        return cmd_init(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
