"""Configuration data models"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..constants import (
    CONFIG_VERSION,
    DEFAULT_API_URL,
    DEFAULT_BRANCH,
    DEFAULT_COMMITTER_EMAIL,
    DEFAULT_COMMITTER_NAME,
    DEFAULT_EDITOR_NAME,
    DEFAULT_INDEX_FILE,
    DEFAULT_PAGES_ENVIRONMENT,
    DEFAULT_SITES_DIR,
    DEFAULT_STORAGE_TYPE,
    DEFAULT_WEB_URL,
    RECENT_CHANGES_LIMIT,
    REPOSITORY_NAME_PATTERN,
    SITE_LOCATION_PATTERN,
    ProbeErrorPolicy,
    StorageType,
)


@dataclass
class RepositoryConfig:
    """Configuration for the content repository backing published sites"""

    owner: str
    name: str
    type: str = DEFAULT_STORAGE_TYPE
    branch: str = DEFAULT_BRANCH
    api_url: str = DEFAULT_API_URL
    web_url: str = DEFAULT_WEB_URL
    token: Optional[str] = None
    environment: str = DEFAULT_PAGES_ENVIRONMENT
    pages_url: Optional[str] = None
    sites_dir: str = DEFAULT_SITES_DIR
    index_file: str = DEFAULT_INDEX_FILE
    timeout: Optional[float] = None

    def __post_init__(self):
        """Validate repository configuration"""
        StorageType(self.type)

        if not self.owner or not REPOSITORY_NAME_PATTERN.match(self.owner):
            raise ValueError(f"Invalid repository owner: {self.owner!r}")
        if not self.name or not REPOSITORY_NAME_PATTERN.match(self.name):
            raise ValueError(f"Invalid repository name: {self.name!r}")
        if not self.sites_dir.strip("/"):
            raise ValueError("Repository 'sites_dir' must not be empty")
        if "/" in self.index_file or not self.index_file:
            raise ValueError(f"Invalid index file name: {self.index_file!r}")

        self.sites_dir = self.sites_dir.strip("/")
        self.api_url = self.api_url.rstrip("/")
        self.web_url = self.web_url.rstrip("/")
        if self.pages_url:
            self.pages_url = self.pages_url.rstrip("/")

    @property
    def storage_type(self) -> StorageType:
        """Get StorageType enum"""
        return StorageType(self.type)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @property
    def default_pages_url(self) -> str:
        """Project pages URL GitHub assigns when no custom domain is set"""
        return f"https://{self.owner.lower()}.github.io/{self.name}"

    def get_display_info(self) -> str:
        """Get display information for the repository"""
        if self.storage_type == StorageType.MEMORY:
            return f"In-memory: {self.full_name}"
        return f"GitHub: {self.full_name} ({self.branch})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (the token is never serialized)"""
        data = {
            "type": self.type,
            "owner": self.owner,
            "name": self.name,
            "branch": self.branch,
            "api_url": self.api_url,
            "web_url": self.web_url,
            "environment": self.environment,
            "sites_dir": self.sites_dir,
            "index_file": self.index_file,
        }

        if self.pages_url:
            data["pages_url"] = self.pages_url
        if self.timeout is not None:
            data["timeout"] = self.timeout

        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RepositoryConfig':
        """Create from dictionary"""
        timeout = data.get("timeout")
        return cls(
            owner=data.get("owner", ""),
            name=data.get("name", ""),
            type=data.get("type", DEFAULT_STORAGE_TYPE),
            branch=data.get("branch", DEFAULT_BRANCH),
            api_url=data.get("api_url", DEFAULT_API_URL),
            web_url=data.get("web_url", DEFAULT_WEB_URL),
            token=data.get("token") or None,
            environment=data.get("environment", DEFAULT_PAGES_ENVIRONMENT),
            pages_url=data.get("pages_url"),
            sites_dir=data.get("sites_dir", DEFAULT_SITES_DIR),
            index_file=data.get("index_file", DEFAULT_INDEX_FILE),
            timeout=float(timeout) if timeout is not None else None,
        )


@dataclass
class CommitterConfig:
    """Bot identity recorded as author and committer"""

    name: str = DEFAULT_COMMITTER_NAME
    email: str = DEFAULT_COMMITTER_EMAIL
    editor_name: str = DEFAULT_EDITOR_NAME

    def to_identity(self) -> Dict[str, str]:
        return {"name": self.name, "email": self.email}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "editor_name": self.editor_name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CommitterConfig':
        return cls(
            name=data.get("name", DEFAULT_COMMITTER_NAME),
            email=data.get("email", DEFAULT_COMMITTER_EMAIL),
            editor_name=data.get("editor_name", DEFAULT_EDITOR_NAME),
        )


@dataclass
class PublishConfig:
    """Publish and status query behaviour"""

    probe_errors: ProbeErrorPolicy = ProbeErrorPolicy.STRICT
    recent_changes_limit: int = RECENT_CHANGES_LIMIT

    def __post_init__(self):
        if self.recent_changes_limit < 1:
            raise ValueError("'recent_changes_limit' must be at least 1")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "probe_errors": self.probe_errors.value,
            "recent_changes_limit": self.recent_changes_limit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PublishConfig':
        return cls(
            probe_errors=ProbeErrorPolicy(data.get("probe_errors", ProbeErrorPolicy.STRICT.value)),
            recent_changes_limit=int(data.get("recent_changes_limit", RECENT_CHANGES_LIMIT)),
        )


@dataclass
class Config:
    """Complete configuration"""

    repository: RepositoryConfig
    version: str = CONFIG_VERSION
    committer: CommitterConfig = field(default_factory=CommitterConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)

    # Site identifier -> site location
    sites: Dict[str, str] = field(default_factory=dict)

    # Logging
    logging: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Config':
        """Create from dictionary"""
        repository = data.get("repository")
        if not isinstance(repository, dict):
            raise ValueError("Missing 'repository' section")

        sites = data.get("sites") or {}
        if not isinstance(sites, dict):
            raise ValueError("'sites' must be a mapping of site identifier to location")
        for site_id, location in sites.items():
            if not SITE_LOCATION_PATTERN.match(str(location)) or ".." in str(location):
                raise ValueError(f"Invalid location {location!r} for site {site_id!r}")

        return cls(
            repository=RepositoryConfig.from_dict(repository),
            version=str(data.get("version", CONFIG_VERSION)),
            committer=CommitterConfig.from_dict(data.get("committer") or {}),
            publish=PublishConfig.from_dict(data.get("publish") or {}),
            sites={str(site_id): str(location) for site_id, location in sites.items()},
            logging=data.get("logging") or {},
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "version": self.version,
            "repository": self.repository.to_dict(),
            "committer": self.committer.to_dict(),
            "publish": self.publish.to_dict(),
            "sites": dict(self.sites),
            "logging": self.logging,
        }
