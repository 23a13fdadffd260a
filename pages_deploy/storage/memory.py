"""In-memory content repository backend implementation"""

import hashlib
import itertools
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .base import ContentRepository
from ..api.exceptions import ConflictError, RemoteNotFoundError
from ..constants import DEFAULT_BRANCH, DEFAULT_WEB_URL
from ..models.remote import (
    ChangeRecord,
    CommitReceipt,
    DeploymentEvent,
    DeploymentEventStatus,
    FileRevision,
)


def blob_revision(content: bytes) -> str:
    """Compute the git blob sha of ``content``"""
    header = f"blob {len(content)}\0".encode()
    return hashlib.sha1(header + content).hexdigest()


@dataclass(frozen=True)
class _Commit:
    revision: str
    message: str
    author: Dict[str, str]
    timestamp: datetime
    paths: Tuple[str, ...]


class InMemoryRepository(ContentRepository):
    """Versioned in-process store following the GitHub contents contract

    Files carry git blob revisions, every write appends a commit, and an
    update is accepted only when the expected revision matches the stored
    one. Deployment events are not produced by writes; they are recorded
    explicitly with ``record_deployment`` and ``record_deployment_status``.
    """

    def __init__(self, config: Dict[str, Any] = None):
        """
        Initialize in-memory repository

        Args:
            config: Configuration including:
                - owner: Repository owner (used in commit URLs)
                - name: Repository name (used in commit URLs)
                - branch: Branch name
                - web_url: Base URL for commit links
        """
        super().__init__(config)
        self.owner = self.config.get('owner', 'local')
        self.repo = self.config.get('name', 'sites')
        self.branch = self.config.get('branch', DEFAULT_BRANCH)
        self.web_url = self.config.get('web_url', DEFAULT_WEB_URL).rstrip('/')

        self._files: Dict[str, bytes] = {}
        self._commits: List[_Commit] = []
        self._deployments: List[DeploymentEvent] = []
        self._statuses: Dict[int, List[DeploymentEventStatus]] = {}
        self._ids = itertools.count(1)

    async def _do_initialize(self) -> None:
        """Nothing to connect"""
        pass

    async def read_file(self, path: str) -> FileRevision:
        path = _normalize(path)
        if path not in self._files:
            raise RemoteNotFoundError(path)
        return FileRevision(path=path, revision=blob_revision(self._files[path]))

    async def write_file(self,
                         path: str,
                         content: bytes,
                         message: str,
                         author: Dict[str, str],
                         expected_revision: Optional[str] = None) -> CommitReceipt:
        path = _normalize(path)
        current = self._files.get(path)

        if current is None and expected_revision:
            raise ConflictError(path, expected_revision, status_code=409,
                                detail=f"{path} does not exist")
        if current is not None:
            current_revision = blob_revision(current)
            if not expected_revision:
                raise ConflictError(path, None, status_code=422,
                                    detail="\"sha\" wasn't supplied.")
            if expected_revision != current_revision:
                raise ConflictError(path, expected_revision, status_code=409,
                                    detail=f"{path} does not match {current_revision}")

        self._files[path] = bytes(content)
        commit = self._commit(message, author, (path,))
        return CommitReceipt(revision=commit.revision, url=self._commit_url(commit.revision))

    async def list_recent_changes(self, path: str, limit: int) -> List[ChangeRecord]:
        prefix = _normalize(path)
        changes = []
        for commit in reversed(self._commits):
            if any(_within(p, prefix) for p in commit.paths):
                changes.append(ChangeRecord(
                    revision=commit.revision,
                    message=commit.message,
                    author=commit.author.get('name'),
                    timestamp=commit.timestamp,
                    url=self._commit_url(commit.revision),
                ))
                if len(changes) >= limit:
                    break
        return changes

    async def list_deployment_events(self, environment: str, limit: int) -> List[DeploymentEvent]:
        events = [e for e in reversed(self._deployments) if e.environment == environment]
        return events[:limit]

    async def list_deployment_event_statuses(self,
                                             event_id: int,
                                             limit: int) -> List[DeploymentEventStatus]:
        return list(reversed(self._statuses.get(event_id, [])))[:limit]

    # ------------------------------------------------------------------
    # Inspection and seeding
    # ------------------------------------------------------------------
    def get_content(self, path: str) -> Optional[bytes]:
        """Return stored content of ``path`` or None"""
        return self._files.get(_normalize(path))

    @property
    def commit_count(self) -> int:
        return len(self._commits)

    def record_deployment(self, environment: str, revision: Optional[str] = None) -> DeploymentEvent:
        """Record a deployment event for ``environment`` (head commit by default)"""
        if revision is None and self._commits:
            revision = self._commits[-1].revision
        event = DeploymentEvent(
            id=next(self._ids),
            environment=environment,
            ref=self.branch,
            revision=revision,
            created_at=datetime.now(timezone.utc),
        )
        self._deployments.append(event)
        return event

    def record_deployment_status(self,
                                 event_id: int,
                                 state: str,
                                 description: Optional[str] = None) -> DeploymentEventStatus:
        """Append a status to a recorded deployment event"""
        if not any(e.id == event_id for e in self._deployments):
            raise KeyError(f"Unknown deployment event: {event_id}")
        status = DeploymentEventStatus(
            id=next(self._ids),
            state=state,
            created_at=datetime.now(timezone.utc),
            description=description,
        )
        self._statuses.setdefault(event_id, []).append(status)
        return status

    def _commit(self, message: str, author: Dict[str, str], paths: Tuple[str, ...]) -> _Commit:
        parent = self._commits[-1].revision if self._commits else ""
        timestamp = datetime.now(timezone.utc)
        seed = "\n".join([parent, message, timestamp.isoformat(), *paths, str(len(self._commits))])
        commit = _Commit(
            revision=hashlib.sha1(seed.encode('utf-8')).hexdigest(),
            message=message,
            author=dict(author),
            timestamp=timestamp,
            paths=paths,
        )
        self._commits.append(commit)
        return commit

    def _commit_url(self, revision: str) -> str:
        return f"{self.web_url}/{self.owner}/{self.repo}/commit/{revision}"


def _normalize(path: str) -> str:
    return path.strip('/')


def _within(path: str, prefix: str) -> bool:
    return not prefix or path == prefix or path.startswith(prefix + '/')
