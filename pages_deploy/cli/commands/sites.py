"""Sites command implementation"""

import click

from ..utils.output import exit_with_error, format_json, format_site_list
from ...api.exceptions import PagesDeployError
from ...core import SitePathResolver, SiteRegistry


@click.command()
@click.option('--json', 'as_json', is_flag=True,
              help='Print the sites as JSON')
@click.pass_obj
def sites(obj, as_json):
    """List the configured sites

    Examples:
        pages-deploy sites
        pages-deploy sites --json
    """
    try:
        config = obj.config
        registry = SiteRegistry.from_config(config)
    except PagesDeployError as e:
        exit_with_error(e)

    paths = SitePathResolver(config.repository)
    mapping = dict(registry.items())

    if as_json:
        format_json([
            {"siteId": site_id, "siteFolder": location, "siteUrl": paths.get_site_url(location)}
            for site_id, location in mapping.items()
        ])
    else:
        format_site_list(mapping, paths.get_site_url)
