# pages_deploy/cli/utils/output.py
"""Output formatting utilities"""

import json
import sys
from typing import Any, Dict, Optional

import click
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ...api.exceptions import ConfigError, PagesDeployError
from ...constants import (
    EMOJI_ERROR,
    EMOJI_LINK,
    EMOJI_SUCCESS,
    EMOJI_WARNING,
    MSG_PAGES_NOTICE,
)
from ...core.status import badge_for
from ...models import DeploymentDescriptor, DeploymentStatusView
from ...utils.formatting import format_timestamp, short_revision, truncate

console = Console()
err_console = Console(stderr=True)

# Width of commit messages in the recent changes table
MESSAGE_WIDTH = 30


def format_deployment_descriptor(result: DeploymentDescriptor) -> None:
    """Format and display publish result"""
    if not result.success:
        print_failure("Publish Error", result.error, result.details)
        return

    lines = [
        f"[green]{EMOJI_SUCCESS}[/green] {result.message}",
        "",
        f"[bold]Site:[/bold] {result.site_location}",
        f"[bold]Commit:[/bold] {short_revision(result.commit_revision)}",
        f"[bold]Status:[/bold] {format_badge(result.deployment_status)}",
        "",
        f"{EMOJI_LINK} [link={result.site_url}]{result.site_url}[/link]",
    ]
    if result.commit_url:
        lines.append(f"{EMOJI_LINK} [link={result.commit_url}]{result.commit_url}[/link]")
    lines.extend(["", f"[dim]{MSG_PAGES_NOTICE}[/dim]"])

    console.print(Panel("\n".join(lines), title="Publish Result", border_style="green"))


def format_status_view(view: DeploymentStatusView) -> None:
    """Format and display a site's deployment status"""
    if not view.success:
        print_failure("Status Error", view.error, view.details)
        return

    _, colour = badge_for(view.deployment_status)
    lines = [
        f"[bold]Site:[/bold] {view.site_location}",
        f"[bold]Deployment:[/bold] {format_badge(view.deployment_status)}",
    ]
    if view.deployment_revision:
        lines.append(f"[bold]Deployed commit:[/bold] {short_revision(view.deployment_revision)}")
    lines.extend([
        "",
        f"{EMOJI_LINK} Live site: [link={view.site_url}]{view.site_url}[/link]",
        f"{EMOJI_LINK} Repository: [link={view.repo_url}]{view.repo_url}[/link]",
    ])

    console.print(Panel("\n".join(lines), title="Deployment Status", border_style=colour))

    if not view.recent_changes:
        console.print("[yellow]No recent changes[/yellow]")
        return

    table = Table(title="Recent Changes", box=box.SIMPLE)
    table.add_column("Commit", style="cyan")
    table.add_column("Message")
    table.add_column("Author", style="green")
    table.add_column("Date", style="dim")

    for change in view.recent_changes:
        table.add_row(
            change.short_revision,
            truncate(change.message, MESSAGE_WIDTH),
            change.author or "N/A",
            format_timestamp(change.timestamp),
        )

    console.print(table)


def format_site_list(sites: Dict[str, str], site_url_for) -> None:
    """Format and display the configured sites"""
    if not sites:
        console.print("[yellow]No sites configured[/yellow]")
        return

    table = Table(title="Sites", box=box.SIMPLE)
    table.add_column("Site ID", style="cyan")
    table.add_column("Location", style="green")
    table.add_column("URL", style="dim")

    for site_id, location in sites.items():
        table.add_row(site_id, location, site_url_for(location))

    console.print(table)


def format_badge(state) -> str:
    label, colour = badge_for(state)
    return f"[{colour}]{label}[/{colour}]"


def format_json(data: Any) -> None:
    """Print JSON data

    Output goes through plain stdout when it is not a terminal so that
    it can be piped to other tools.
    """
    json_str = json.dumps(data, indent=2, default=str)
    if not console.is_terminal:
        click.echo(json_str)
        return
    console.print(Syntax(json_str, "json", theme="monokai", line_numbers=False))


def print_failure(title: str, error: Optional[str], details: Optional[str] = None) -> None:
    """Print a failed result in an error panel"""
    lines = [f"[red]{EMOJI_ERROR} {error}[/red]"]
    if details:
        lines.extend(["", details])
    err_console.print(Panel("\n".join(lines), title=f"[bold red]{title}[/bold red]",
                            border_style="red"))


def print_error(message: str, error: Optional[Exception] = None) -> None:
    """Print error message"""
    if error:
        err_console.print(f"[red]Error:[/red] {message}: {str(error)}")
    else:
        err_console.print(f"[red]Error:[/red] {message}")


def print_warning(message: str) -> None:
    """Print warning message"""
    err_console.print(f"[yellow]{EMOJI_WARNING} Warning:[/yellow] {message}")


def print_success(message: str) -> None:
    """Print success message"""
    console.print(f"[green]{EMOJI_SUCCESS}[/green] {message}")


def exit_with_error(error: PagesDeployError) -> None:
    """Report an error raised before any remote call and exit

    Configuration problems exit with status 2, everything else with 1.
    """
    print_failure("Configuration Error" if isinstance(error, ConfigError) else "Error",
                  error.message)
    sys.exit(2 if isinstance(error, ConfigError) else 1)
