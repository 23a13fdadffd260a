"""Publish command implementation"""

import sys
from pathlib import Path

import click

from ..utils.output import (
    console,
    exit_with_error,
    format_deployment_descriptor,
    format_json,
    format_status_view,
    print_failure,
    print_warning,
)
from ...api import Publisher, StatusQuery
from ...api.exceptions import PagesDeployError
from ...constants import DEFAULT_WATCH_TIMEOUT, DeploymentState
from ...core.status import is_settled
from ...utils.async_utils import run_async


@click.command()
@click.argument('site_id')
@click.option('--file', '-f', 'page_file', type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='HTML file to publish (default: read from stdin)')
@click.option('--site-name', '-n', default=None,
              help='Site name used in the default commit message')
@click.option('--message', '-m', default=None,
              help='Commit message')
@click.option('--wait', '-w', is_flag=True,
              help='Wait for the Pages deployment to settle')
@click.option('--timeout', type=float, default=DEFAULT_WATCH_TIMEOUT, show_default=True,
              help='Seconds to wait with --wait')
@click.option('--json', 'as_json', is_flag=True,
              help='Print the result as JSON')
@click.pass_obj
def publish(obj, site_id, page_file, site_name, message, wait, timeout, as_json):
    """Publish a page for a site

    The page becomes the site's index file in the content repository.
    The commit is created when the file is new and updated otherwise.

    Examples:
        # Publish a file
        pages-deploy publish 8471936c-3bb6-48d4-81e1-3791fc089938 -f index.html

        # Publish from a pipe and wait for the site to go live
        render-site | pages-deploy publish SITE_ID --wait
    """
    try:
        publisher = Publisher(obj.config)
    except PagesDeployError as e:
        exit_with_error(e)

    if page_file is None:
        stdin = click.get_text_stream('stdin')
        if stdin.isatty():
            print_failure("Usage Error", "No page content given",
                          "Pass --file PATH or pipe the HTML on stdin.")
            sys.exit(2)
        content = stdin.read()
        if not content:
            print_failure("Usage Error", "Page content is empty")
            sys.exit(2)
        task = publisher.publish_async(site_id, content, site_name, message)
    else:
        task = publisher.publish_file_async(site_id, page_file, site_name, message)

    if as_json:
        result = run_async(task)
    else:
        with console.status("[bold green]Publishing page...[/bold green]"):
            result = run_async(task)

    if not result.success or not wait:
        if as_json:
            format_json(result.to_dict())
        else:
            format_deployment_descriptor(result)
        if not result.success:
            sys.exit(1)
        return

    if not as_json:
        format_deployment_descriptor(result)

    # Reuse the backend so the watch sees the commit just written
    query = StatusQuery(obj.config, repository=publisher.repository)
    watch = query.watch_async(site_id, revision=result.commit_revision, timeout=timeout)
    if as_json:
        view = run_async(watch)
    else:
        with console.status("[bold green]Waiting for GitHub Pages...[/bold green]"):
            view = run_async(watch)

    if as_json:
        data = result.to_dict()
        if view.success:
            data["deploymentStatus"] = view.deployment_status.value
        format_json(data)
    else:
        format_status_view(view)

    if not view.success or view.deployment_status in (DeploymentState.FAILURE, DeploymentState.ERROR):
        sys.exit(1)
    if view.deployment_revision != result.commit_revision or not is_settled(view.deployment_status):
        print_warning("Deployment did not settle before the timeout")
