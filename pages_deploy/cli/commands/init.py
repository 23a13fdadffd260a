"""Initialize command for creating a pages-deploy configuration"""

import sys
from pathlib import Path
from typing import Dict, Tuple

import click

from ..utils.output import console, print_error, print_warning
from ...constants import (
    DEFAULT_BRANCH,
    EMOJI_ROCKET,
    EMOJI_SUCCESS,
    ENV_GITHUB_TOKEN,
    PROJECT_CONFIG_FILE,
)
from ...models import Config, RepositoryConfig
from ...services import ConfigService


def parse_site_spec(spec: str) -> Tuple[str, str]:
    """Parse a ``SITE_ID=LOCATION`` pair"""
    site_id, sep, location = spec.partition('=')
    if not sep or not site_id or not location:
        raise ValueError(f"Invalid site format: {spec}. Use 'SITE_ID=LOCATION'")
    return site_id.strip(), location.strip()


@click.command()
@click.argument('path', required=False, default='.',
                type=click.Path(file_okay=False, path_type=Path))
@click.option('--owner', '-o', prompt='Repository owner',
              help='Owner of the content repository')
@click.option('--repo', '-r', 'name', prompt='Repository name',
              help='Name of the content repository')
@click.option('--branch', '-b', default=DEFAULT_BRANCH, show_default=True,
              help='Branch that GitHub Pages builds from')
@click.option('--pages-url', default=None,
              help='Base URL of the published Pages site')
@click.option('--site', 'site_specs', multiple=True,
              help='Site to register (format: SITE_ID=LOCATION)')
@click.option('--force', '-f', is_flag=True,
              help='Overwrite an existing configuration')
def init(path, owner, name, branch, pages_url, site_specs, force):
    """Create a .pages-deploy.yaml configuration

    The access token is not stored; it is read from $GITHUB_TOKEN.

    Examples:
        pages-deploy init --owner Deankann2023 --repo sitehub-customer-sites
        pages-deploy init --owner acme --repo sites --site 1234=acme-home
    """
    config_path = path.resolve() / PROJECT_CONFIG_FILE

    if config_path.exists() and not force:
        print_warning(f"{config_path} already exists (use --force to overwrite)")
        sys.exit(1)

    sites: Dict[str, str] = {}
    try:
        for spec in site_specs:
            site_id, location = parse_site_spec(spec)
            sites[site_id] = location

        config = Config.from_dict({
            "repository": RepositoryConfig(
                owner=owner,
                name=name,
                branch=branch,
                pages_url=pages_url,
            ).to_dict(),
            "sites": sites,
        })
    except ValueError as e:
        print_error("Invalid configuration", e)
        sys.exit(2)

    console.print(f"\n{EMOJI_ROCKET} Writing {config_path}...")
    config_path.parent.mkdir(parents=True, exist_ok=True)
    ConfigService(config_path).save_config(config)

    console.print(f"\n{EMOJI_SUCCESS} Configuration created!")
    console.print(f"\nRepository: {config.repository.get_display_info()}")
    console.print(f"Sites: {len(config.sites)}")

    console.print(f"\n{EMOJI_SUCCESS} Next steps:")
    console.print(f"1. export {ENV_GITHUB_TOKEN}=<token with contents:write>")
    console.print(f"2. Add sites under 'sites:' in {PROJECT_CONFIG_FILE}")
    console.print("3. pages-deploy publish <site-id> --file index.html")
