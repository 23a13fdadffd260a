"""Records returned by content repository backends"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class FileRevision:
    """Current revision of a stored file"""
    path: str
    revision: str


@dataclass(frozen=True)
class CommitReceipt:
    """Commit created by a successful write"""
    revision: str
    url: str


@dataclass(frozen=True)
class ChangeRecord:
    """One entry of a path's change history"""
    revision: str
    message: str
    author: Optional[str] = None
    timestamp: Optional[datetime] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class DeploymentEvent:
    """One attempt to build and publish content to an environment"""
    id: int
    environment: str
    ref: Optional[str] = None
    revision: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class DeploymentEventStatus:
    """Status reported for a deployment event"""
    id: int
    state: str
    created_at: Optional[datetime] = None
    description: Optional[str] = None
    environment_url: Optional[str] = None
