"""Deployment reconciler: publish pages and report their Pages status"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

from .path_resolver import SitePathResolver
from .site_registry import SiteRegistry
from .status import latest_event, latest_state, trim_changes
from ..api.exceptions import RemoteError, RemoteNotFoundError
from ..constants import (
    COMMIT_TIMESTAMP_FORMAT,
    DEFAULT_COMMIT_MESSAGE,
    DEPLOYMENT_EVENTS_LIMIT,
    DEPLOYMENT_STATUSES_LIMIT,
    MSG_PUBLISH_SUCCESS,
    DeploymentState,
    ProbeErrorPolicy,
)
from ..models.config import Config
from ..models.result import DeploymentDescriptor, DeploymentStatusView
from ..storage.base import ContentRepository
from ..storage.factory import StorageFactory

logger = logging.getLogger(__name__)


class DeploymentReconciler:
    """Publishes site content and aggregates deployment state

    Each call is a short sequential chain of remote calls with no retries
    and no state shared between calls. Revisions are read fresh on every
    publish; the repository's revision check is the only guard against
    concurrent writers.
    """

    def __init__(self,
                 registry: SiteRegistry,
                 repository: ContentRepository,
                 config: Config):
        """
        Initialize reconciler

        Args:
            registry: Site registry
            repository: Content repository backend
            config: Complete configuration
        """
        self.registry = registry
        self.repository = repository
        self.config = config
        self.paths = SitePathResolver(config.repository)

    @classmethod
    def from_config(cls,
                    config: Config,
                    repository: Optional[ContentRepository] = None) -> 'DeploymentReconciler':
        """Build a reconciler whose backend is chosen by the configuration"""
        if repository is None:
            repository = StorageFactory.create_from_config(config.repository)
        return cls(SiteRegistry.from_config(config), repository, config)

    async def publish(self,
                      site_id: str,
                      content: str,
                      site_name: Optional[str] = None,
                      commit_message: Optional[str] = None) -> DeploymentDescriptor:
        """
        Publish a page for a site

        Args:
            site_id: Site identifier
            content: Page content (HTML)
            site_name: Display name used in the default commit message
            commit_message: Commit message overriding the default

        Returns:
            DeploymentDescriptor with ``deployment_status`` pending

        Raises:
            UnconfiguredSiteError: If the site is not registered
            RemoteError: If the probe (strict policy) or the write fails
        """
        location = self.registry.resolve(site_id)
        path = self.paths.get_index_path(location)

        expected_revision = await self._probe_revision(path)

        message = commit_message or self._default_commit_message(site_name or location)
        receipt = await self.repository.write_file(
            path,
            content.encode('utf-8'),
            message,
            self.config.committer.to_identity(),
            expected_revision=expected_revision,
        )

        logger.info("Published %s to %s at %s", site_id, path, receipt.revision[:7])

        return DeploymentDescriptor(
            success=True,
            site_location=location,
            commit_revision=receipt.revision,
            commit_url=receipt.url,
            site_url=self.paths.get_site_url(location),
            deployment_status=DeploymentState.PENDING,
            message=MSG_PUBLISH_SUCCESS,
        )

    async def get_status(self, site_id: str) -> DeploymentStatusView:
        """
        Aggregate recent changes and the latest deployment state of a site

        Args:
            site_id: Site identifier

        Returns:
            DeploymentStatusView (``unknown`` when there is no deployment history)

        Raises:
            UnconfiguredSiteError: If the site is not registered
            RemoteError: If any remote call fails
        """
        location = self.registry.resolve(site_id)
        limit = self.config.publish.recent_changes_limit

        # Independent reads; the status lookup below needs the event id
        changes, events = await asyncio.gather(
            self.repository.list_recent_changes(self.paths.get_site_dir(location), limit),
            self.repository.list_deployment_events(
                self.config.repository.environment, DEPLOYMENT_EVENTS_LIMIT
            ),
        )

        state = DeploymentState.UNKNOWN
        event = latest_event(events)
        if event is not None:
            statuses = await self.repository.list_deployment_event_statuses(
                event.id, DEPLOYMENT_STATUSES_LIMIT
            )
            state = latest_state(statuses)

        return DeploymentStatusView(
            success=True,
            site_location=location,
            site_url=self.paths.get_site_url(location),
            repo_url=self.paths.get_repo_url(location),
            deployment_status=state,
            recent_changes=trim_changes(changes, limit),
            deployment_revision=event.revision if event is not None else None,
        )

    async def _probe_revision(self, path: str) -> Optional[str]:
        """Read the current revision of ``path``; None means create"""
        try:
            current = await self.repository.read_file(path)
        except RemoteNotFoundError:
            logger.info("%s does not exist yet, creating it", path)
            return None
        except RemoteError as e:
            if self.config.publish.probe_errors == ProbeErrorPolicy.LENIENT:
                logger.warning("Revision probe for %s failed (%s); writing without a "
                               "revision precondition", path, e)
                return None
            raise

        return current.revision

    def _default_commit_message(self, name: str) -> str:
        timestamp = datetime.now(timezone.utc).strftime(COMMIT_TIMESTAMP_FORMAT)
        return DEFAULT_COMMIT_MESSAGE.format(
            name=name,
            editor=self.config.committer.editor_name,
            timestamp=timestamp,
        )
