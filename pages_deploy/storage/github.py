"""GitHub content repository backend implementation"""

import base64
import logging
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .base import ContentRepository
from ..api.exceptions import (
    ConflictError,
    RateLimitError,
    RemoteAuthError,
    RemoteError,
    RemoteNotFoundError,
)
from ..constants import (
    DEFAULT_API_URL,
    DEFAULT_BRANCH,
    GITHUB_API_VERSION,
    GITHUB_MEDIA_TYPE,
)
from ..models.remote import (
    ChangeRecord,
    CommitReceipt,
    DeploymentEvent,
    DeploymentEventStatus,
    FileRevision,
)
from ..utils.formatting import parse_timestamp
from ..__version__ import __version__

logger = logging.getLogger(__name__)


class GitHubRepository(ContentRepository):
    """Content repository backed by the GitHub REST API"""

    def __init__(self,
                 config: Dict[str, Any] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initialize GitHub repository

        Args:
            config: GitHub configuration including:
                - owner: Repository owner
                - name: Repository name
                - branch: Branch commits are written to
                - api_url: REST API base URL
                - token: Access token (optional for public reads)
                - timeout: Request timeout in seconds (httpx default if absent)
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(config)
        self.owner = self.config.get('owner')
        self.repo = self.config.get('name')
        self.branch = self.config.get('branch', DEFAULT_BRANCH)
        self.api_url = self.config.get('api_url', DEFAULT_API_URL).rstrip('/')
        self._token = self.config.get('token')
        self._transport = transport
        self.client: Optional[httpx.AsyncClient] = None

        if not self.owner or not self.repo:
            raise ValueError("GitHub repository requires 'owner' and 'name'")

    async def _do_initialize(self) -> None:
        """Open the HTTP client"""
        headers = {
            'Accept': GITHUB_MEDIA_TYPE,
            'X-GitHub-Api-Version': GITHUB_API_VERSION,
            'User-Agent': f"pages-deploy/{__version__}",
        }
        if self._token:
            headers['Authorization'] = f"Bearer {self._token}"

        options: Dict[str, Any] = {
            'base_url': self.api_url,
            'headers': headers,
        }
        if self.config.get('timeout') is not None:
            options['timeout'] = self.config['timeout']
        if self._transport is not None:
            options['transport'] = self._transport

        self.client = httpx.AsyncClient(**options)

    async def _do_close(self) -> None:
        """Close the HTTP client"""
        if self.client is not None:
            await self.client.aclose()
            self.client = None

    @property
    def _repo_prefix(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def _contents_url(self, path: str) -> str:
        return f"{self._repo_prefix}/contents/{quote(path.strip('/'), safe='/')}"

    async def read_file(self, path: str) -> FileRevision:
        """Read the current blob sha of a file"""
        response = await self._request(
            'GET', self._contents_url(path), path,
            params={'ref': self.branch}
        )
        data = self._json(response)

        if isinstance(data, list):
            raise RemoteError(f"Expected a file but found a directory: {path}",
                              status_code=response.status_code)

        try:
            return FileRevision(path=path, revision=data['sha'])
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Unexpected contents payload for {path}", cause=e) from e

    async def write_file(self,
                         path: str,
                         content: bytes,
                         message: str,
                         author: Dict[str, str],
                         expected_revision: Optional[str] = None) -> CommitReceipt:
        """Create or update a file through the contents API"""
        body: Dict[str, Any] = {
            'message': message,
            'content': base64.b64encode(content).decode('ascii'),
            'branch': self.branch,
            'author': dict(author),
            'committer': dict(author),
        }
        if expected_revision:
            body['sha'] = expected_revision

        logger.debug("Writing %s (%d bytes, %s)", path, len(content),
                     f"update of {expected_revision[:7]}" if expected_revision else "create")

        response = await self._request(
            'PUT', self._contents_url(path), path,
            json=body,
            expected_revision=expected_revision
        )
        data = self._json(response)

        try:
            commit = data['commit']
            return CommitReceipt(revision=commit['sha'], url=commit['html_url'])
        except (KeyError, TypeError) as e:
            raise RemoteError(f"Unexpected commit payload for {path}", cause=e) from e

    async def list_recent_changes(self, path: str, limit: int) -> List[ChangeRecord]:
        """List commits touching a path on the configured branch

        A repository without any commit answers 409 ("Git Repository is
        empty."), which is reported as no changes.
        """
        try:
            response = await self._request(
                'GET', f"{self._repo_prefix}/commits", path,
                params={'path': path, 'sha': self.branch, 'per_page': limit}
            )
        except RemoteError as e:
            if e.status_code != 409:
                raise
            logger.debug("No commits for %s: %s", path, e)
            return []

        changes = []
        try:
            for item in self._json(response)[:limit]:
                commit = item['commit']
                commit_author = commit.get('author') or {}
                changes.append(ChangeRecord(
                    revision=item['sha'],
                    message=commit.get('message', ''),
                    author=commit_author.get('name'),
                    timestamp=parse_timestamp(commit_author.get('date')),
                    url=item.get('html_url'),
                ))
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Unexpected commit list payload for {path}", cause=e) from e

        return changes

    async def list_deployment_events(self, environment: str, limit: int) -> List[DeploymentEvent]:
        """List deployments of an environment"""
        response = await self._request(
            'GET', f"{self._repo_prefix}/deployments", environment,
            params={'environment': environment, 'per_page': limit}
        )

        try:
            return [
                DeploymentEvent(
                    id=item['id'],
                    environment=item.get('environment', environment),
                    ref=item.get('ref'),
                    revision=item.get('sha'),
                    created_at=parse_timestamp(item.get('created_at')),
                )
                for item in self._json(response)[:limit]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Unexpected deployment list payload for {environment}",
                              cause=e) from e

    async def list_deployment_event_statuses(self,
                                             event_id: int,
                                             limit: int) -> List[DeploymentEventStatus]:
        """List statuses of a deployment"""
        response = await self._request(
            'GET', f"{self._repo_prefix}/deployments/{event_id}/statuses", f"deployment {event_id}",
            params={'per_page': limit}
        )

        try:
            return [
                DeploymentEventStatus(
                    id=item['id'],
                    state=item['state'],
                    created_at=parse_timestamp(item.get('created_at')),
                    description=item.get('description'),
                    environment_url=item.get('environment_url'),
                )
                for item in self._json(response)[:limit]
            ]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteError(f"Unexpected deployment status payload for deployment {event_id}",
                              cause=e) from e

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _request(self,
                       method: str,
                       url: str,
                       subject: str,
                       expected_revision: Optional[str] = None,
                       **kwargs) -> httpx.Response:
        """Send a request and translate failures into RemoteError"""
        await self.initialize()

        try:
            response = await self.client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            raise RemoteError(f"GitHub request failed: {method} {url}: {e}", cause=e) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise self._translate_status_error(method, response, subject, expected_revision, e) from e

        return response

    def _translate_status_error(self,
                                method: str,
                                response: httpx.Response,
                                subject: str,
                                expected_revision: Optional[str],
                                cause: httpx.HTTPStatusError) -> RemoteError:
        """Map a GitHub error response onto the error taxonomy

        Only writes carry a revision precondition, so 409 and sha related
        422 answers are conflicts on PUT and plain remote errors otherwise.
        """
        status = response.status_code
        detail = self._error_message(response)

        if status == 404:
            return RemoteNotFoundError(subject, cause=cause)

        if method == 'PUT' and (status == 409 or (status == 422 and 'sha' in detail.lower())):
            return ConflictError(subject, expected_revision, cause=cause,
                                 status_code=status, detail=detail)

        if status in (403, 429):
            remaining = response.headers.get('x-ratelimit-remaining')
            retry_after = response.headers.get('retry-after')
            if status == 429 or remaining == '0' or retry_after:
                return RateLimitError(
                    f"GitHub rate limit exceeded: {detail}",
                    cause=cause,
                    status_code=status,
                    retry_after=self._parse_retry_after(retry_after)
                )

        if status in (401, 403):
            return RemoteAuthError(f"GitHub authentication failed: {detail}",
                                   cause=cause, status_code=status)

        return RemoteError(f"GitHub API error {status}: {detail}", cause=cause, status_code=status)

    @staticmethod
    def _parse_retry_after(value: Optional[str]) -> Optional[float]:
        """Seconds to wait from a Retry-After header (delta seconds or HTTP date)"""
        if not value:
            return None
        try:
            return max(float(value), 0.0)
        except ValueError:
            pass
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            logger.debug("Ignoring unparseable Retry-After header: %r", value)
            return None
        if when is None:
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        if isinstance(data, dict) and data.get('message'):
            return str(data['message'])
        return response.reason_phrase

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise RemoteError(f"Invalid JSON from GitHub: {response.url}", cause=e) from e
