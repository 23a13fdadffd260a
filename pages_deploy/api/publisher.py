"""Publisher API for publishing site pages"""

import logging
from pathlib import Path
from typing import Optional, Union

import aiofiles

from ..core import DeploymentReconciler
from ..models import Config, DeploymentDescriptor
from ..services import ConfigService
from ..storage import ContentRepository
from ..utils.async_utils import run_async
from .exceptions import PagesDeployError, RemoteError, ValidationError

logger = logging.getLogger(__name__)


class Publisher:
    """Publisher class for publishing operations"""

    def __init__(self,
                 config: Config,
                 repository: Optional[ContentRepository] = None):
        """
        Initialize publisher

        Args:
            config: Complete configuration
            repository: Backend override (defaults to the configured one)
        """
        self.config = config
        self.reconciler = DeploymentReconciler.from_config(config, repository)
        self.repository = self.reconciler.repository

    def publish(self,
                site_id: str,
                content: str,
                site_name: Optional[str] = None,
                commit_message: Optional[str] = None) -> DeploymentDescriptor:
        """
        Publish a page

        Args:
            site_id: Site identifier
            content: Page content (HTML)
            site_name: Display name used in the default commit message
            commit_message: Commit message (optional)

        Returns:
            DeploymentDescriptor: success, or a failure carrying the error
        """
        return run_async(self.publish_async(site_id, content, site_name, commit_message))

    async def publish_async(self,
                            site_id: str,
                            content: str,
                            site_name: Optional[str] = None,
                            commit_message: Optional[str] = None) -> DeploymentDescriptor:
        """Async publish implementation"""
        try:
            async with self.repository:
                return await self.reconciler.publish(
                    site_id, content,
                    site_name=site_name,
                    commit_message=commit_message
                )
        except PagesDeployError as e:
            logger.error("Publishing %s failed: %s", site_id, e)
            return failed_descriptor(e)

    async def publish_file_async(self,
                                 site_id: str,
                                 page_path: Union[str, Path],
                                 site_name: Optional[str] = None,
                                 commit_message: Optional[str] = None) -> DeploymentDescriptor:
        """Publish the page stored in a local file"""
        page_path = Path(page_path)
        if not page_path.is_file():
            return failed_descriptor(ValidationError(f"Page file not found: {page_path}"))

        async with aiofiles.open(page_path, 'r', encoding='utf-8') as f:
            content = await f.read()

        return await self.publish_async(site_id, content, site_name, commit_message)


def failed_descriptor(error: PagesDeployError) -> DeploymentDescriptor:
    """Failure result for a publish request"""
    if isinstance(error, RemoteError):
        return DeploymentDescriptor(
            success=False,
            error="Failed to deploy to GitHub",
            error_code=error.error_code,
            details=str(error),
        )
    return DeploymentDescriptor(
        success=False,
        error=error.message,
        error_code=error.error_code,
    )


# Convenience function
def publish(site_id: str,
            content: str,
            site_name: Optional[str] = None,
            commit_message: Optional[str] = None,
            config: Optional[Config] = None) -> DeploymentDescriptor:
    """
    Publish a page (convenience function)

    Args:
        site_id: Site identifier
        content: Page content (HTML)
        site_name: Display name used in the default commit message
        commit_message: Commit message (optional)
        config: Configuration (discovered from the environment if omitted)

    Returns:
        DeploymentDescriptor

    Raises:
        ConfigError: If no usable configuration is found
    """
    if config is None:
        config = ConfigService.discover().config

    return Publisher(config).publish(site_id, content, site_name, commit_message)
