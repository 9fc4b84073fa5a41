#!/usr/bin/env python3
"""
specflow CLI

Main command-line interface for specflow using Click.
Provides commands for creating feature specs, detecting the tracking backend
of a repository, and inspecting the GitHub repository context.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .backend_classifier import resolve_personal_patterns
from .config import apply_yaml_config, get_config
from .feature_namer import FeatureNameError, InvalidNameFormatError
from .git_integration import GitHubCLI
from .workspace_manager import BranchCreationError, FeatureWorkspace, WorkspaceError

console = Console()
err_console = Console(stderr=True, soft_wrap=True)

USAGE = (
    "Usage: specflow create-feature [--json] [--project NAME] "
    "[--custom-name TICKET-feature-name] <feature_description>"
)


class Config:
    """Global configuration object passed between commands."""

    CONFIG_PATHS = [
        Path("config/config.yaml"),
        Path("config/default_config.yaml"),
    ]

    def __init__(self) -> None:
        self.config: dict = {}
        self.verbose: bool = False
        self.config_path: Optional[Path] = None

    def load_config(self, explicit_path: Optional[Path] = None) -> None:
        """Load configuration from YAML files and apply it to the constants."""
        config_paths = [explicit_path] if explicit_path else self.CONFIG_PATHS

        for config_path in config_paths:
            if config_path.exists():
                with open(config_path) as f:
                    self.config = yaml.safe_load(f) or {}
                self.config_path = config_path
                break

        apply_yaml_config(self.config)


pass_config = click.make_pass_decorator(Config, ensure=True)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _print_available_projects(projects) -> None:
    err_console.print("\nAvailable projects:")
    if not projects:
        err_console.print("  [dim](none)[/dim]")
    for name in projects:
        err_console.print(f"  - {escape(name)}")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option(
    "--config-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML configuration file (default: config/config.yaml)",
)
@pass_config
def main(config: Config, verbose: bool, config_file: Optional[Path]) -> None:
    """specflow - feature naming and tracking backend detection."""
    config.verbose = verbose
    _setup_logging(verbose)
    config.load_config(config_file)


@main.command(name="create-feature")
@click.option("--json", "json_mode", is_flag=True, help="Output in JSON format")
@click.option("--project", "-p", help="Project directory in the workspace (e.g., wiliot-mcp-python)")
@click.option(
    "--custom-name",
    "-n",
    help="Use custom branch name (e.g., CLDS-1234-feature-name or 005-feature-name)",
)
@click.argument("description", nargs=-1)
@pass_config
def create_feature(
    config: Config,
    json_mode: bool,
    project: Optional[str],
    custom_name: Optional[str],
    description: Tuple[str, ...],
) -> None:
    """Create a numbered feature spec folder and branch in a project.

    Examples:

        specflow create-feature --project wiliot-mcp-python create authentication system

        specflow create-feature -p wilibot-backend-python -n CLDS-1234-auth-system create authentication system
    """
    feature_description = " ".join(description).strip()
    if not feature_description:
        err_console.print(f"[red]{escape(USAGE)}[/red]")
        sys.exit(1)

    workspace = FeatureWorkspace()

    try:
        creation = workspace.create_feature(project, feature_description, custom_name)
    except WorkspaceError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        _print_available_projects(e.available_projects)
        sys.exit(1)
    except BranchCreationError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except InvalidNameFormatError as e:
        err_console.print("[red]Error: Custom name must match one of these formats:[/red]")
        for accepted in e.accepted_formats:
            err_console.print(f"[red]       - {escape(accepted)}[/red]")
        err_console.print("[red]       Feature name must contain only lowercase letters, numbers, and hyphens[/red]")
        sys.exit(1)
    except FeatureNameError as e:
        err_console.print(f"[red]Error: {escape(str(e))}[/red]")
        sys.exit(1)
    except Exception as e:
        err_console.print(f"[red]Error creating feature: {escape(str(e))}[/red]")
        if config.verbose:
            raise
        sys.exit(1)

    if json_mode:
        click.echo(json.dumps(creation.to_dict()))
        return

    for key, value in creation.to_dict().items():
        console.print(f"{key}: {escape(value)}", soft_wrap=True)
    console.print(f"SPECIFY_FEATURE={escape(creation.branch_name)}", soft_wrap=True)
    console.print(f"SPECIFY_PROJECT={escape(creation.project)}", soft_wrap=True)


@main.command(name="detect-backend")
@click.option("--json", "json_mode", is_flag=True, help="Output in JSON format")
@click.option(
    "--path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=".",
    help="Repository directory (default: current directory)",
)
@click.option(
    "--gh-lookup/--no-gh-lookup",
    default=True,
    help="Ask gh for the authenticated user when no personal patterns are configured",
)
@pass_config
def detect_backend(config: Config, json_mode: bool, path: Path, gh_lookup: bool) -> None:
    """Detect whether to use Jira or GitHub Issues for tracking.

    Prints 'jira' (use acli jira workitem commands), 'github' (use gh issue
    commands) or 'none' (no git remote detected).
    """
    settings = get_config()
    provider = GitHubCLI().get_authenticated_username if gh_lookup else None
    personal_patterns = resolve_personal_patterns(settings.PERSONAL_PATTERNS, provider)

    detection = FeatureWorkspace().detect_backend(path, personal_patterns)

    if json_mode:
        click.echo(json.dumps(detection.to_dict(), indent=2))
    else:
        click.echo(detection.backend.value)


@main.command(name="repo-context")
@click.option("--company-handle", envvar="COMPANY_HANDLE", help="Company GitHub account")
@click.option("--personal-handle", envvar="PERSONAL_HANDLE", help="Personal GitHub account")
@click.option(
    "--path",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Repository directory (default: current directory)",
)
@pass_config
def repo_context(
    config: Config,
    company_handle: Optional[str],
    personal_handle: Optional[str],
    path: Optional[Path],
) -> None:
    """Show repository owner, name and default branch.

    When both account handles are set, gh is switched to the company account
    for company-owned repositories and to the personal account otherwise.
    """
    gh = GitHubCLI()
    context = gh.get_repo_context(path)
    if context is None:
        sys.exit(1)

    if company_handle and personal_handle:
        switched = gh.switch_account(context.owner, company_handle, personal_handle)
        if switched == company_handle:
            console.print(f"AUTH: Switched to company account ({escape(switched)})")
        elif switched:
            console.print(f"AUTH: Switched to personal account ({escape(switched)})")

    click.echo(f"REPO_OWNER={context.owner}")
    click.echo(f"REPO_NAME={context.name}")
    click.echo(f"REPO_FULL={context.full_name}")
    click.echo(f"DEFAULT_BRANCH={context.default_branch}")


@main.command(name="list-projects")
@pass_config
def list_projects(config: Config) -> None:
    """List workspace projects and their feature specs."""
    workspace = FeatureWorkspace()
    projects = workspace.list_projects()

    if not projects:
        console.print(f"[yellow]No projects found in {escape(str(workspace.workspace_root))}[/yellow]")
        return

    table = Table(title="Projects")
    table.add_column("Project", style="cyan", no_wrap=True)
    table.add_column("Features", style="green", justify="right")
    table.add_column("Next", style="magenta")

    for name in projects:
        existing = workspace.existing_features(name)
        next_number = workspace.namer.next_sequential_number(existing)
        table.add_row(name, str(len(existing)), f"{next_number:03d}")

    console.print(table)


if __name__ == "__main__":
    main()
