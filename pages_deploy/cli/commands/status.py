"""Status command implementation"""

import sys

import click

from ..utils.output import (
    console,
    exit_with_error,
    format_json,
    format_status_view,
)
from ...api import StatusQuery
from ...api.exceptions import PagesDeployError
from ...constants import DEFAULT_WATCH_TIMEOUT
from ...core.status import badge_for
from ...utils.async_utils import run_async


@click.command()
@click.argument('site_id')
@click.option('--watch', '-w', is_flag=True,
              help='Poll until the latest deployment settles')
@click.option('--timeout', type=float, default=DEFAULT_WATCH_TIMEOUT, show_default=True,
              help='Seconds to wait with --watch')
@click.option('--json', 'as_json', is_flag=True,
              help='Print the status as JSON')
@click.pass_obj
def status(obj, site_id, watch, timeout, as_json):
    """Show the deployment status of a site

    Reports the state of the latest GitHub Pages deployment together
    with the most recent commits touching the site folder.

    Examples:
        pages-deploy status 8471936c-3bb6-48d4-81e1-3791fc089938
        pages-deploy status SITE_ID --watch --timeout 120
        pages-deploy status SITE_ID --json
    """
    try:
        query = StatusQuery(obj.config)
    except PagesDeployError as e:
        exit_with_error(e)

    if not watch:
        view = run_async(query.get_status_async(site_id))
    elif as_json:
        view = run_async(query.watch_async(site_id, timeout=timeout))
    else:
        with console.status("[bold green]Waiting for GitHub Pages...[/bold green]") as spinner:
            def on_update(current):
                label, _ = badge_for(current.deployment_status)
                spinner.update(f"[bold green]Waiting for GitHub Pages...[/bold green] {label}")

            view = run_async(query.watch_async(site_id, timeout=timeout, on_update=on_update))

    if as_json:
        format_json(view.to_dict())
    else:
        format_status_view(view)

    if not view.success:
        sys.exit(1)
