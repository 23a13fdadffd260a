"""Query API for deployment status"""

import logging
from typing import Callable, Optional

from ..constants import DEFAULT_WATCH_TIMEOUT
from ..core import DeploymentReconciler, DeploymentWatcher
from ..models import Config, DeploymentStatusView
from ..services import ConfigService
from ..storage import ContentRepository
from ..utils.async_utils import run_async
from .exceptions import PagesDeployError, RemoteError

logger = logging.getLogger(__name__)


class StatusQuery:
    """Read-only status interface"""

    def __init__(self,
                 config: Config,
                 repository: Optional[ContentRepository] = None,
                 watcher_options: Optional[dict] = None):
        """
        Initialize status query

        Args:
            config: Complete configuration
            repository: Backend override (defaults to the configured one)
            watcher_options: DeploymentWatcher keyword arguments
        """
        self.config = config
        self.reconciler = DeploymentReconciler.from_config(config, repository)
        self.repository = self.reconciler.repository
        self.watcher = DeploymentWatcher(self.reconciler, **(watcher_options or {}))

    def get_status(self, site_id: str) -> DeploymentStatusView:
        """
        Query the status of a site

        Args:
            site_id: Site identifier

        Returns:
            DeploymentStatusView: status, or a failure carrying the error
        """
        return run_async(self.get_status_async(site_id))

    async def get_status_async(self, site_id: str) -> DeploymentStatusView:
        try:
            async with self.repository:
                return await self.reconciler.get_status(site_id)
        except PagesDeployError as e:
            logger.error("Status query for %s failed: %s", site_id, e)
            return failed_view(e)

    async def watch_async(self,
                          site_id: str,
                          revision: Optional[str] = None,
                          timeout: float = DEFAULT_WATCH_TIMEOUT,
                          on_update: Optional[Callable[[DeploymentStatusView], None]] = None
                          ) -> DeploymentStatusView:
        """Poll until the site's latest deployment settles or ``timeout`` expires"""
        try:
            async with self.repository:
                return await self.watcher.wait(
                    site_id,
                    revision=revision,
                    timeout=timeout,
                    on_update=on_update
                )
        except PagesDeployError as e:
            logger.error("Watching %s failed: %s", site_id, e)
            return failed_view(e)


def failed_view(error: PagesDeployError) -> DeploymentStatusView:
    """Failure result for a status query"""
    if isinstance(error, RemoteError):
        return DeploymentStatusView(
            success=False,
            error="Failed to get GitHub info",
            error_code=error.error_code,
            details=str(error),
        )
    return DeploymentStatusView(
        success=False,
        error=error.message,
        error_code=error.error_code,
    )


def get_status(site_id: str, config: Optional[Config] = None) -> DeploymentStatusView:
    """
    Query the status of a site (convenience function)

    Args:
        site_id: Site identifier
        config: Configuration (discovered from the environment if omitted)

    Returns:
        DeploymentStatusView

    Raises:
        ConfigError: If no usable configuration is found
    """
    if config is None:
        config = ConfigService.discover().config

    return StatusQuery(config).get_status(site_id)
