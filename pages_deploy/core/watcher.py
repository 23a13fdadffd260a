"""Background polling of asynchronous Pages builds"""

import asyncio
import logging
from typing import Callable, Optional

from .reconciler import DeploymentReconciler
from .status import is_settled
from ..constants import (
    DEFAULT_WATCH_BACKOFF,
    DEFAULT_WATCH_INTERVAL,
    DEFAULT_WATCH_MAX_INTERVAL,
    DEFAULT_WATCH_TIMEOUT,
)
from ..models.result import DeploymentStatusView
from ..utils.async_utils import poll_until
from ..utils.formatting import format_duration

logger = logging.getLogger(__name__)


class DeploymentWatcher:
    """Polls a site's status until its deployment settles

    Publishing only ever reports ``pending``; callers that need the real
    outcome wait here. Cancelling the awaiting task stops the poll.
    """

    def __init__(self,
                 reconciler: DeploymentReconciler,
                 interval: float = DEFAULT_WATCH_INTERVAL,
                 backoff: float = DEFAULT_WATCH_BACKOFF,
                 max_interval: float = DEFAULT_WATCH_MAX_INTERVAL,
                 sleep=asyncio.sleep):
        self.reconciler = reconciler
        self.interval = interval
        self.backoff = backoff
        self.max_interval = max_interval
        self._sleep = sleep

    async def wait(self,
                   site_id: str,
                   revision: Optional[str] = None,
                   timeout: float = DEFAULT_WATCH_TIMEOUT,
                   on_update: Optional[Callable[[DeploymentStatusView], None]] = None
                   ) -> DeploymentStatusView:
        """
        Wait for the latest deployment of a site to settle

        Args:
            site_id: Site identifier
            revision: Only settle on a deployment of this commit
            timeout: Seconds before giving up and returning the last view
            on_update: Callback invoked with every polled view

        Returns:
            The settled view, or the last view seen when the timeout expires

        Raises:
            UnconfiguredSiteError: If the site is not registered
            RemoteError: If a status query fails
            asyncio.TimeoutError: If no view was obtained before the timeout
        """
        last: Optional[DeploymentStatusView] = None

        async def probe() -> DeploymentStatusView:
            nonlocal last
            last = await self.reconciler.get_status(site_id)
            return last

        def done(view: DeploymentStatusView) -> bool:
            if revision and view.deployment_revision != revision:
                return False
            return is_settled(view.deployment_status)

        try:
            return await asyncio.wait_for(
                poll_until(probe, done,
                           interval=self.interval,
                           backoff=self.backoff,
                           max_interval=self.max_interval,
                           on_result=on_update,
                           sleep=self._sleep),
                timeout,
            )
        except asyncio.TimeoutError:
            if last is None:
                raise
            logger.warning("Deployment of %s still %s after %s",
                           site_id, last.deployment_status.value, format_duration(timeout))
            return last
