"""Result models for publish and status operations"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from ..constants import DeploymentState


@dataclass
class DeploymentDescriptor:
    """Outcome of a publish request"""

    success: bool
    site_location: Optional[str] = None
    commit_revision: Optional[str] = None
    commit_url: Optional[str] = None
    site_url: Optional[str] = None
    deployment_status: DeploymentState = DeploymentState.PENDING
    message: str = ""
    error: Optional[str] = None
    error_code: Optional[str] = None
    details: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON body returned to site editor clients"""
        if not self.success:
            return _failure_dict(self.error, self.details)

        return {
            "success": True,
            "message": self.message,
            "commitSha": self.commit_revision,
            "commitUrl": self.commit_url,
            "siteUrl": self.site_url,
            "deploymentStatus": self.deployment_status.value,
        }


@dataclass
class RecentChange:
    """Condensed commit entry shown in a status view"""

    short_revision: str
    message: str
    author: Optional[str] = None
    timestamp: Optional[datetime] = None
    url: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sha": self.short_revision,
            "message": self.message,
            "author": self.author,
            "date": self.timestamp.isoformat().replace("+00:00", "Z") if self.timestamp else None,
            "url": self.url,
        }


@dataclass
class DeploymentStatusView:
    """Aggregated snapshot of recent changes and latest deployment state"""

    success: bool = True
    site_location: Optional[str] = None
    site_url: Optional[str] = None
    repo_url: Optional[str] = None
    deployment_status: DeploymentState = DeploymentState.UNKNOWN
    recent_changes: List[RecentChange] = field(default_factory=list)
    deployment_revision: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    details: Optional[str] = None

    @property
    def is_live(self) -> bool:
        return self.deployment_status == DeploymentState.SUCCESS

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON body returned to site editor clients"""
        if not self.success:
            return _failure_dict(self.error, self.details)

        return {
            "success": True,
            "siteFolder": self.site_location,
            "siteUrl": self.site_url,
            "repoUrl": self.repo_url,
            "deploymentStatus": self.deployment_status.value,
            "recentCommits": [change.to_dict() for change in self.recent_changes],
        }


def _failure_dict(error: Optional[str], details: Optional[str]) -> Dict[str, Any]:
    data = {"success": False, "error": error}
    if details:
        data["details"] = details
    return data
