# pages_deploy/storage/base.py
"""Content repository abstract base class"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..models.remote import (
    ChangeRecord,
    CommitReceipt,
    DeploymentEvent,
    DeploymentEventStatus,
    FileRevision,
)


class ContentRepository(ABC):
    """Abstract base class for versioned content stores

    Every operation is a remote call. Failures surface as ``RemoteError``
    (or one of its subclasses) with the underlying cause attached; backends
    never retry internally.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize content repository

        Args:
            config: Backend-specific configuration
        """
        self.config = config or {}
        self._initialized = False
        self._users = 0

    async def initialize(self) -> None:
        """Initialize backend (e.g., open HTTP connections)"""
        if not self._initialized:
            await self._do_initialize()
            self._initialized = True

    @abstractmethod
    async def _do_initialize(self) -> None:
        """Actual initialization logic to be implemented by subclasses"""
        pass

    @abstractmethod
    async def read_file(self, path: str) -> FileRevision:
        """
        Read the current revision of a file

        Args:
            path: Path within the repository

        Returns:
            Current revision of the file

        Raises:
            RemoteNotFoundError: If the file does not exist
            RemoteError: On any other failure
        """
        pass

    @abstractmethod
    async def write_file(self,
                         path: str,
                         content: bytes,
                         message: str,
                         author: Dict[str, str],
                         expected_revision: Optional[str] = None) -> CommitReceipt:
        """
        Create or update a file

        Args:
            path: Path within the repository
            content: Raw file content
            message: Commit message
            author: Identity (name, email) used as author and committer
            expected_revision: Revision the update is based on; None creates

        Returns:
            Receipt of the created commit

        Raises:
            ConflictError: If the expected revision is stale
            RemoteError: On any other failure
        """
        pass

    @abstractmethod
    async def list_recent_changes(self, path: str, limit: int) -> List[ChangeRecord]:
        """
        List changes touching a path, most recent first

        Args:
            path: Path prefix within the repository
            limit: Maximum number of records

        Returns:
            Change records
        """
        pass

    @abstractmethod
    async def list_deployment_events(self, environment: str, limit: int) -> List[DeploymentEvent]:
        """
        List deployment events of an environment, most recent first

        Args:
            environment: Environment name
            limit: Maximum number of records

        Returns:
            Deployment events
        """
        pass

    @abstractmethod
    async def list_deployment_event_statuses(self,
                                             event_id: int,
                                             limit: int) -> List[DeploymentEventStatus]:
        """
        List statuses of a deployment event, most recent first

        Args:
            event_id: Deployment event identifier
            limit: Maximum number of records

        Returns:
            Deployment event statuses
        """
        pass

    async def close(self) -> None:
        """Close backend connections"""
        if self._initialized:
            await self._do_close()
            self._initialized = False

    async def _do_close(self) -> None:
        """Actual cleanup logic to be implemented by subclasses"""
        pass

    async def __aenter__(self):
        """Async context manager entry

        Entries nest: the backend stays open until the last active block
        exits, so overlapping operations can share one repository.
        """
        await self.initialize()
        self._users += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        self._users -= 1
        if self._users == 0:
            await self.close()
