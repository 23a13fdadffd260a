# pages_deploy/cli/main.py
"""Main CLI entry point for pages-deploy"""

import os
import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.logging import RichHandler

from ..__version__ import get_version
from ..constants import APP_NAME, ENV_LOG_LEVEL, LOG_FORMAT
from ..models import Config
from ..services import ConfigService
from ..storage import StorageFactory
from .utils.output import console, err_console

# Import all commands
from .commands import (
    init,
    publish,
    status,
    sites,
)


def setup_logging(verbose: bool = False, debug: bool = False) -> None:
    """Setup logging configuration

    Args:
        verbose: Enable verbose output (INFO level)
        debug: Enable debug output (DEBUG level)
    """
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.getLevelName(os.environ.get(ENV_LOG_LEVEL, "WARNING").upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Configure rich handler
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            RichHandler(
                console=err_console,
                show_time=debug,
                show_path=debug,
                rich_tracebacks=True,
                tracebacks_suppress=[click]
            )
        ],
        force=True
    )

    # Adjust third-party loggers
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.DEBUG if debug else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


class Context:
    """CLI context object with lazy configuration loading

    The configuration file is only looked up when a command asks for it,
    so ``init`` and ``--help`` work outside a configured directory.
    """

    def __init__(self,
                 config_path: Optional[Path] = None,
                 storage: Optional[str] = None):
        """Initialize CLI context

        Args:
            config_path: Explicit configuration file
            storage: Backend type overriding ``repository.type``
        """
        self.config_path = config_path
        self.storage = storage
        self.verbose: bool = False
        self.debug: bool = False
        self._config_service: Optional[ConfigService] = None

    @property
    def config_service(self) -> ConfigService:
        """Get config service (lazy loading)

        Raises:
            ConfigError: If no configuration file can be found
        """
        if self._config_service is None:
            self._config_service = ConfigService.discover(self.config_path)
            if self.debug:
                console.print(f"[dim]Configuration: {self._config_service.config_path}[/dim]")
        return self._config_service

    @property
    def config(self) -> Config:
        """Get configuration with command line overrides applied

        Raises:
            ConfigError: If the configuration is missing or invalid
        """
        config = self.config_service.config
        if self.storage:
            config.repository.type = self.storage

        level = config.logging.get("level")
        if level and not (self.verbose or self.debug) and ENV_LOG_LEVEL not in os.environ:
            logging.getLogger().setLevel(str(level).upper())

        return config


@click.group(name=APP_NAME)
@click.option('-c', '--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              help='Configuration file (default: nearest .pages-deploy.yaml)')
@click.option('-s', '--storage', type=click.Choice(StorageFactory.get_supported_types(), case_sensitive=False),
              help='Override the configured repository backend')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-d', '--debug', is_flag=True, help='Enable debug output')
@click.option('-q', '--quiet', is_flag=True, help='Suppress all output except errors')
@click.version_option(get_version(), prog_name=APP_NAME)
@click.pass_context
def cli(ctx, config_path, storage, verbose, debug, quiet):
    """Pages Deploy - Publish site pages to GitHub Pages

    Each configured site owns a folder in a content repository. Publishing
    commits the site's index page into that folder; GitHub Pages then
    builds and serves it. Use 'status' to follow the build.
    """
    # Setup logging
    if quiet:
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=verbose, debug=debug)

    # Create context with lazy configuration
    ctx.obj = Context(config_path=config_path, storage=storage.lower() if storage else None)
    ctx.obj.verbose = verbose
    ctx.obj.debug = debug


# Register commands
cli.add_command(init.init)
cli.add_command(publish.publish)
cli.add_command(status.status)
cli.add_command(sites.sites)


def main():
    """Main entry point for the CLI application

    This function handles:
    - Keyboard interrupts
    - Unexpected exceptions with proper error display
    """
    try:
        cli(prog_name=APP_NAME)

    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)

    except Exception as e:
        err_console.print(f"[red]Unexpected error: {e}[/red]")
        if '--debug' in sys.argv or '-d' in sys.argv:
            err_console.print_exception()
        sys.exit(1)


if __name__ == "__main__":
    main()
